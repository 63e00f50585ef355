"""
Command-line entry point tests.

Scope
- Validate that main() prints the report, or writes it to the -o destination.
- Validate that stdout gets the exact report text unless it is a terminal.
- Validate that a failing command never escapes main().
- Validate the TEXTSCOPE_LOGLEVEL switch.

Conventions
- Test method names follow CamelCase per project convention.
- The module console is swapped for one writing into a StringIO.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from unittest import TestCase, mock

from rich.console import Console

from textscope import Command, Engine, Output
from textscope import __main__ as cli


class Broken(Command):
    caller = "-b"
    alias = "--broken"

    def validate(self, flag, instruction, operations):
        raise AttributeError("no such thing")

    def execute(self, flag, operations):
        return Output.undefined()


class TestMain(TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

        self.stdout = io.StringIO()
        for patcher in (
            mock.patch.object(cli, "console", self.console(force_terminal=False)),
            mock.patch.dict(os.environ, {"TEXTSCOPE_LOGLEVEL": ""}),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)

        self.source = os.path.join(self.directory.name, "source.txt")
        with open(self.source, "w", encoding="utf-8") as stream:
            stream.write("madam arora teaches malayalam")

    def console(self, **options):
        return Console(file=self.stdout, color_system=None, highlight=False, soft_wrap=True, width=200, **options)

    def testPrintsReport(self):
        self.assertEqual(cli.main(["-f", self.source, "-w", "-p", "madam", "arora"]), 0)
        self.assertEqual(
            self.stdout.getvalue().splitlines(),
            ["[SUCCESS]: <-w> Words: 4", "[SUCCESS]: <-p> {", '    "madam",', '    "arora",', "}"]
        )

    def testPrintsErrors(self):
        self.assertEqual(cli.main([]), 0)
        self.assertEqual(self.stdout.getvalue(), "[ERROR]: <ENGINE> Source file is invalid!\n")

    def testWritesOutputFile(self):
        destination = os.path.join(self.directory.name, "report.txt")
        self.assertEqual(cli.main(["-f", self.source, "-c", "-o", destination]), 0)
        self.assertEqual(self.stdout.getvalue(), "")
        with open(destination, encoding="utf-8") as stream:
            self.assertEqual(stream.read(), "[SUCCESS]: <-c> Chars: 29\n")

    def testUnwritableOutputIsPrinted(self):
        cli.main(["-f", self.source, "-w", "-o", self.directory.name])
        self.assertEqual(
            self.stdout.getvalue().splitlines(),
            ["[SUCCESS]: <-w> Words: 4", "[ERROR]: <ENGINE> Output file can't be written!"]
        )

    def testStdoutMatchesOutputFileExactly(self):
        tokens = ["-f", self.source, "-w", "-x\ty\bz"]
        cli.main(tokens)
        destination = os.path.join(self.directory.name, "report.txt")
        cli.main(["-o", destination] + tokens)
        with open(destination, encoding="utf-8", newline="") as stream:
            written = stream.read()
        self.assertEqual(written, "[ERROR]: <ENGINE> Invalid flag: [-x\ty\bz]\n")
        self.assertEqual(self.stdout.getvalue(), written)

    def testTerminalGetsStyledReport(self):
        with mock.patch.object(cli, "console", self.console(force_terminal=True)):
            cli.main(["-f", self.source, "-w", "-c"])
        self.assertEqual(
            self.stdout.getvalue().splitlines(),
            ["[SUCCESS]: <-w> Words: 4", "[SUCCESS]: <-c> Chars: 29"]
        )

    def testBrokenCommandStillExitsCleanly(self):
        with mock.patch.object(cli, "create_engine", lambda: Engine().add(Broken)):
            self.assertEqual(cli.main(["-f", self.source, "-b"]), 0)
        self.assertEqual(self.stdout.getvalue(), "[ERROR]: <-b> Validation failed: no such thing\n")

    def testLoggingIsOffByDefault(self):
        with mock.patch("logging.basicConfig") as configure:
            cli.main([])
        configure.assert_not_called()

    def testLoggingLevelFromEnvironment(self):
        with mock.patch.dict(os.environ, {"TEXTSCOPE_LOGLEVEL": "debug"}), \
             mock.patch("logging.basicConfig") as configure:
            cli.main([])
        self.assertEqual(configure.call_args.kwargs["level"], "DEBUG")

    def testUnknownLoggingLevelFallsBackToWarning(self):
        with mock.patch.dict(os.environ, {"TEXTSCOPE_LOGLEVEL": "chatty"}), \
             mock.patch("logging.basicConfig") as configure:
            cli.main([])
        self.assertEqual(configure.call_args.kwargs["level"], cli.logging.WARNING)


if __name__ == "__main__":
    unittest.main()
