"""
Phase outcomes and the aggregated run report.

- Result: tri-state outcome kind (OK, ERR, UNDEFINED).
- Output: the outcome of one command phase. Empty messages are never rendered,
  whatever the result kind.
- Report: the ordered outputs of one engine run plus the optional destination
  path. Renders to the plain textual report, or to a styled rich Text.

Report format
    [SUCCESS]: <-w> Words: 12
    [ERROR]: <ENGINE> Invalid flag: [-x]

Styling
- The host application may define a __styles__ mapping in __main__ to override
  the default styles ("success", "error", "message").
"""
from collections import defaultdict
from enum import Enum

from rich.text import Text

from .faults import CommandException
from .utils import mirror


class Result(Enum):
    OK = "SUCCESS"
    ERR = "ERROR"
    UNDEFINED = ""


class Output:
    """
    Outcome of a validate or execute phase.

    Build with the named constructors rather than calling Output() directly:
    Output.ok(message), Output.err(message), Output.undefined() or
    Output.fault(exception).
    """
    __slots__ = ("_result", "_message", "_code")

    result = mirror("result")
    message = mirror("message")
    code = mirror("code")

    def __init__(self, result=Result.UNDEFINED, message="", /, code=None):
        if not isinstance(result, Result):
            raise TypeError("Output() first argument must be a result")
        if not isinstance(message, str):
            raise TypeError("Output() second argument must be a string")
        self._result = result
        self._message = message if result is not Result.UNDEFINED else ""
        self._code = code

    @classmethod
    def ok(cls, message="", /):
        return cls(Result.OK, message)

    @classmethod
    def err(cls, message="", /, code=None):
        return cls(Result.ERR, message, code=code)

    @classmethod
    def undefined(cls):
        return cls()

    @classmethod
    def fault(cls, exception, /):
        """Convert a raised fault into the equivalent Err output."""
        if not isinstance(exception, CommandException):
            raise TypeError("Output.fault() argument must be a command exception")
        return cls(Result.ERR, str(exception), code=exception.code)

    @property
    def failed(self):
        return self._result is Result.ERR

    @property
    def empty(self):
        return not self._message

    def render(self):
        """Return the report line (without newline), or "" when nothing is reportable."""
        if self.empty:
            return ""
        return f"[{self._result.value}]: {self._message}"

    def __eq__(self, other):
        if not isinstance(other, Output):
            return NotImplemented
        return (self._result, self._message) == (other._result, other._message)

    def __hash__(self):
        return hash((self._result, self._message))

    def __repr__(self):
        return f"Output({self._result.name}, {self._message!r})"


class Report:
    """
    Ordered outputs of one run and where they should go.

    Parameters
    - outputs: Iterable[Output], kept in collection order; empty messages are dropped.
    - destination: str, output file path ("" to print instead).
    """

    outputs = mirror("outputs")
    destination = mirror("destination")

    def __init__(self, outputs=(), /, destination=""):
        self._outputs = tuple(output for output in outputs if not output.empty)
        self._destination = destination

    def __iter__(self):
        return iter(self._outputs)

    def __len__(self):
        return len(self._outputs)

    def render(self):
        return "".join(output.render() + "\n" for output in self._outputs)

    def __str__(self):
        return self.render()

    def __rich__(self):
        styles = defaultdict(str, {
            "success": "bold green",
            "error": "bold red",
            "message": "",
        } | getattr(__import__("__main__"), "__styles__", {}))

        return Text("\n").join(
            Text.assemble(
                (f"[{output.result.value}]", styles["error" if output.failed else "success"]),
                ": ",
                (output.message, styles["message"]),
            )
            for output in self._outputs
        )

    def __repr__(self):
        return f"Report({len(self._outputs)} outputs, destination={self._destination!r})"


__all__ = (
    "Result",
    "Output",
    "Report",
)
