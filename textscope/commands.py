"""
textscope command layer: the handler contract, its registry and the built-ins.

What this module provides
- Command: abstract handler bound to exactly one flag identity, a short
  "caller" (e.g. -f) and a long "alias" (e.g. --file), implementing the
  two-phase contract:
  • validate(flag, instruction, operations) -> Output
    Runs for every flag before any execute. An Err output (or a raised
    ValidationError) aborts the whole run. May mutate the shared operations and
    the modifier of another flag of the instruction.
  • execute(flag, operations) -> Output
    Produces the reportable result. An Err output (or a raised ExecutionError)
    is recorded but never stops the remaining executions.
- CommandRegistry: ordered collection of commands indexed by caller and alias.
- Built-in identity commands carried by every engine:
  • SourceFile (-f/--file): loads the source text.
  • InputFile (-i/--input): declarative marker for input redirection.
  • OutputFile (-o/--output): records the report destination.

Writing a command
    class CountVowels(Command):
        caller = "-v"
        alias = "--vowels"

        def execute(self, flag, operations):
            count = sum(char in "aeiou" for char in operations.source)
            return Output.ok(f"<{flag.name}> Vowels: {count}")

Design notes
- Commands are stateless; fixed lookup tables live in class constants.
- The CommandType metaclass checks identities at class creation, so a
  misdeclared command fails on import rather than mid-run.
"""
import functools
import inspect
import itertools
import logging
import operator
import re
from abc import ABCMeta, abstractmethod

from . import files
from .faults import FaultCode, ValidationError
from .outputs import Output
from .utils import Unset

log = logging.getLogger(__name__)


def _identity(cls):
    return ("caller", cls.caller), ("alias", cls.alias)


class CommandType(ABCMeta):
    """
    Metaclass for commands.

    Responsibilities
    - Derive a human-friendly __typename__ from the class name ("SourceFile" → "source-file");
      leading underscores of private bases are dropped.
    - Validate caller/alias of concrete commands: both must be strings starting with '-'
      and must differ from each other.
    - Provide a stable class __repr__ for diagnostics: source-file(caller='-f', alias='--file').
    """

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {"__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name.lstrip("_")).lower()},
            **options
        )

        if not inspect.isabstract(self):
            for identity in ("caller", "alias"):
                value = getattr(self, identity)
                if not isinstance(value, str) or not re.fullmatch(r"--?\S+", value):
                    raise TypeError(f"{self.__typename__} {identity!r} must be a string starting with '-'")
            if self.caller == self.alias:
                raise ValueError(f"{self.__typename__} 'caller' and 'alias' must differ")

        return self

    def __repr__(self):
        return f"{self.__typename__}(" + ", ".join(map(functools.partial(operator.mod, "%s=%r"), _identity(self))) + ")"


class Command(metaclass=CommandType):
    """
    Base class of every flag handler.

    Class attributes
    - caller: short flag name, e.g. "-w".
    - alias: long flag name, e.g. "--words".
    - builtin: True only for the engine's identity commands.
    """
    caller = Unset
    alias = Unset
    builtin = False

    def validate(self, flag, instruction, operations):
        """Default validation accepts the flag without reporting anything."""
        return Output.undefined()

    @abstractmethod
    def execute(self, flag, operations):
        raise NotImplementedError

    def __rich_repr__(self):
        yield from _identity(type(self))
        yield "builtin", self.builtin, False

    def __repr__(self):
        return repr(type(self))


class CommandRegistry:
    """
    Ordered registry of commands, indexed by both of their names.

    Registration is idempotent on the (caller, alias) pair: registering a
    command whose pair is already present is silently ignored, so engines can
    chain registrations unconditionally. Lookups are linear and the first
    match in registration order wins.
    """

    def __init__(self):
        self._entries = {}
        self._ids = itertools.count()

    def register(self, command, /):
        """
        Add a command; return True when added, False when its pair already exists.
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if self.exists(command.caller, command.alias):
            log.debug("ignoring duplicate command %r", command)
            return False
        self._entries[next(self._ids)] = (command.caller, command.alias, command)
        log.debug("registered command %r", command)
        return True

    def find_by_caller(self, name, /):
        for caller, _, command in self._entries.values():
            if caller == name:
                return command
        return None

    def find_by_alias(self, name, /):
        for _, alias, command in self._entries.values():
            if alias == name:
                return command
        return None

    def find(self, name, /):
        """Resolve by caller first, falling back to alias."""
        command = self.find_by_caller(name)
        if command is None:
            command = self.find_by_alias(name)
        return command

    def exists(self, caller, alias, /):
        return any(entry[:2] == (caller, alias) for entry in self._entries.values())

    def __iter__(self):
        return (command for _, _, command in self._entries.values())

    def __len__(self):
        return len(self._entries)

    def __contains__(self, command):
        return isinstance(command, Command) and self.exists(command.caller, command.alias)

    def __repr__(self):
        return f"registry({', '.join(map(repr, self))})"


def _requires_argument(flag):
    if flag.empty:
        raise ValidationError(
            "This flag requires an argument!",
            flag=flag.name,
            code=FaultCode.MISSING_ARGUMENT
        )


class SourceFile(Command):
    """Resolves the source file and eagerly loads its text into the operations."""
    caller = "-f"
    alias = "--file"
    builtin = True

    def __init__(self, *, encoding="utf-8"):
        self.encoding = encoding

    def validate(self, flag, instruction, operations):
        _requires_argument(flag)

        if not files.exists(flag.argument):
            raise ValidationError(
                "Provided file doesn't exists!",
                flag=flag.name,
                code=FaultCode.MISSING_FILE
            )

        try:
            source = files.read(flag.argument, encoding=self.encoding)
        except (OSError, UnicodeDecodeError):
            log.warning("can't load source file %r", flag.argument, exc_info=True)
            raise ValidationError(
                "Provided file doesn't exists!",
                flag=flag.name,
                code=FaultCode.MISSING_FILE
            ) from None

        operations.file_in = flag.argument
        operations.source = source
        return Output.ok()

    def execute(self, flag, operations):
        return Output.undefined()


class InputFile(Command):
    """Marker for input redirection; the engine handles it before validation."""
    caller = "-i"
    alias = "--input"
    builtin = True

    def execute(self, flag, operations):
        return Output.undefined()


class OutputFile(Command):
    """Records where the report should be written."""
    caller = "-o"
    alias = "--output"
    builtin = True

    def validate(self, flag, instruction, operations):
        _requires_argument(flag)
        operations.file_out = flag.argument
        return Output.ok()

    def execute(self, flag, operations):
        return Output.undefined()


__all__ = (
    "Command",
    "CommandRegistry",
    "SourceFile",
    "InputFile",
    "OutputFile",
)
