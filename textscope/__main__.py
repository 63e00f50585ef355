"""
textscope command-line entry point.

    textscope -f notes.txt -w -l -s -a listen
    python -m textscope -i flags.txt

The report goes to stdout unless an -o/--output flag names a file. On a
terminal it is colored; otherwise stdout receives exactly the text an output
file would hold. The exit status is always 0: every success and
failure is part of the report.

Environment
- TEXTSCOPE_LOGLEVEL: enables diagnostics on stderr at the given logging level
  (e.g. DEBUG, WARNING).
"""
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from .engine import Engine
from .outputs import Report

console = Console(highlight=False, soft_wrap=True)


def create_engine(**options):
    """Create an engine carrying every analysis command."""
    return Engine(**options).include("textscope.analysis")


def _configure_logging():
    if not (level := os.environ.get("TEXTSCOPE_LOGLEVEL", "").strip().upper()):
        return
    logging.basicConfig(
        level=level if level in logging.getLevelNamesMapping() else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _show(report, /):
    """
    Print a Report (or already rendered report text).

    Only a terminal gets the styled rendition: anything else receives the exact
    text an -o file would hold, tabs and control characters included.
    """
    if not console.is_terminal:
        console.file.write(str(report))
        console.file.flush()
    elif isinstance(report, Report):
        console.print(report)
    else:
        console.print(report, markup=False, emoji=False, end="")


def main(argv=None):
    _configure_logging()

    engine = create_engine()
    report = engine.process(sys.argv[1:] if argv is None else argv)

    if not report.destination:
        if report:
            _show(report)
    elif text := engine.deliver(report):
        _show(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
