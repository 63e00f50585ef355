"""
textscope faults (errors raised while validating and executing flags).

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by phase so logs and searches stay predictable.
- CommandException: base type carrying a message plus options (flag, code) and
  knowing how to tag itself with the offending flag.
- EngineError / ValidationError / ExecutionError: the three fault kinds of a run.

Fault kinds
- EngineError: raised by the engine itself (unknown flag, unresolved source,
  malformed input redirection, unwritable output). Always fatal to the run.
- ValidationError: raised from a command's validate phase (missing argument,
  missing file, illegal flag ordering). Fatal to the run.
- ExecutionError: raised from a command's execute phase. Recorded, never fatal.

Integration
- Commands may either return Output.err(...) or raise one of these faults; the
  engine converts raised faults with Output.fault(...) at its boundary, so no
  fault ever propagates out of Engine.execute().
- str(fault) is the reported message, prefixed with the bracketed tag:
  "<-f> This flag requires an argument!" or "<ENGINE> Source file is invalid!".
"""
from enum import IntEnum
from types import MappingProxyType

from .utils import Unset, coalesce

ENGINE_TAG = "ENGINE"


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - engine (211xx)
      • UNKNOWN_FLAG, UNRESOLVED_SOURCE, MISPLACED_INPUT, MISSING_INPUT_ARGUMENT,
        INVALID_INPUT_FILE, UNWRITABLE_OUTPUT
    - validation (221xx)
      • MISSING_ARGUMENT, MISSING_FILE, NOT_LAST, DANGLING_MODIFIER, MISSING_FOLLOWER,
        DELEGATED_VALIDATION
    - execution (231xx)
      • UNREADABLE_FILE, DELEGATED_ERROR
    """
    # --- engine errors (21xxx) ---
    UNKNOWN_FLAG                = 21101
    UNRESOLVED_SOURCE           = 21102
    MISPLACED_INPUT             = 21111
    MISSING_INPUT_ARGUMENT      = 21112
    INVALID_INPUT_FILE          = 21113
    UNWRITABLE_OUTPUT           = 21121

    # --- validation errors (22xxx) ---
    MISSING_ARGUMENT            = 22101
    MISSING_FILE                = 22102
    NOT_LAST                    = 22111
    DANGLING_MODIFIER           = 22112
    MISSING_FOLLOWER            = 22113
    DELEGATED_VALIDATION        = 22131

    # --- execution errors (23xxx) ---
    UNREADABLE_FILE             = 23101
    DELEGATED_ERROR             = 23131


class CommandException(Exception):
    """
    base fault: a message plus read-only options.

    recognized options
    - flag: name of the offending flag (used as the bracketed tag).
    - code: FaultCode identifying the issue.
    """
    __tag__ = Unset

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def tag(self):
        return coalesce(type(self).__tag__, self.options.get("flag", ""))

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        if not (tag := self.tag):
            return self.message
        return f"<{tag}> {self.message}"


class EngineError(CommandException):
    __tag__ = ENGINE_TAG


class ValidationError(CommandException): ...
class ExecutionError(CommandException): ...


__all__ = (
    "ENGINE_TAG",
    "FaultCode",
    "CommandException",
    "EngineError",
    "ValidationError",
    "ExecutionError",
)
