r"""
Flag model and token parser.

Overview
- Flag: one recognized unit of input (name, argument, position, modifier).
- Instruction: the ordered, position-indexed collection of Flags from one input.
- parse(tokens): single left-to-right pass turning raw tokens into an Instruction.

Parsing rules
- A token is a flag token iff it starts with '-'.
- Non-flag tokens are appended to the argument of the currently open flag,
  joined with single spaces; tokens seen before any flag are discarded.
- Empty tokens are skipped entirely.
- Positions are dense (0..n-1) and follow encounter order.

Example
    >>> instruction = parse(["-f", "notes.txt", "-a", "listen", "silent"])
    >>> [(flag.name, flag.argument, flag.position) for flag in instruction]
    [('-f', 'notes.txt', 0), ('-a', 'listen silent', 1)]

Mutation
- Only Flag.modifier is writable. Commands change it during their validate
  phase, through Instruction.at(position), to alter another flag's execute-time
  behavior (e.g. sort by length). Everything else is read-only once parsed.
"""
import logging
from collections.abc import Iterable

from .utils import mirror

log = logging.getLogger(__name__)


class Flag:
    """
    One parsed flag.

    Attributes
    - name: str, the literal token used ("-w", "--words", ...).
    - argument: str, trailing non-flag tokens joined by single spaces ("" when none).
    - position: int, 0-based index among flags only.
    - modifier: int, 0 by default; the only mutable attribute.
    """
    __slots__ = ("_name", "_argument", "_position", "modifier")

    name = mirror("name")
    argument = mirror("argument")
    position = mirror("position")

    def __init__(self, name, argument="", position=0, /, modifier=0):
        if not isinstance(name, str) or not name:
            raise TypeError("Flag() name must be a non-empty string")
        if not isinstance(argument, str):
            raise TypeError("Flag() argument must be a string")
        if not isinstance(position, int) or position < 0:
            raise ValueError("Flag() position must be a non-negative integer")
        self._name = name
        self._argument = argument
        self._position = position
        self.modifier = modifier

    @property
    def empty(self):
        """True when no argument was given."""
        return not self._argument

    def named(self, *names):
        return self._name in names

    def __eq__(self, other):
        if not isinstance(other, Flag):
            return NotImplemented
        return (
            (self._name, self._argument, self._position, self.modifier) ==
            (other._name, other._argument, other._position, other.modifier)
        )

    __hash__ = None

    def __rich_repr__(self):
        yield "name", self._name
        yield "argument", self._argument
        yield "position", self._position
        yield "modifier", self.modifier, 0

    def __repr__(self):
        return "flag(%s)" % ", ".join(map(lambda pair: "%s=%r" % pair[:2], self.__rich_repr__()))


class Instruction:
    """
    Ordered collection of Flags parsed from one input batch.

    The sequence itself is immutable; flags are looked up by name or position
    and only their modifier may change.
    """

    def __init__(self, flags=(), /):
        self._flags = tuple(flags)

    @classmethod
    def from_tokens(cls, tokens, /):
        """
        Parse raw tokens into an Instruction (see module docstring for the rules).
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("Instruction.from_tokens() argument must be an iterable of strings")

        flags = []
        name = None
        words = []

        def _finalize():
            flags.append(Flag(name, " ".join(words), len(flags)))

        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("Instruction.from_tokens() argument must be an iterable of strings")
            if not token:
                continue
            if token.startswith("-"):
                if name is not None:
                    _finalize()
                name = token
                words = []
            elif name is not None:
                words.append(token)

        if name is not None:
            _finalize()

        log.debug("parsed %d flag(s): %s", len(flags), [flag.name for flag in flags])
        return cls(flags)

    def get(self, name, /):
        """Return the first flag with the given name, or None."""
        for flag in self._flags:
            if flag.name == name:
                return flag
        return None

    def at(self, position, /):
        """Return the flag at the given position, or None."""
        for flag in self._flags:
            if flag.position == position:
                return flag
        return None

    def exists(self, caller, alias, /):
        """Check whether a flag named either caller or alias is present."""
        return any(flag.named(caller, alias) for flag in self._flags)

    def __iter__(self):
        return iter(self._flags)

    def __len__(self):
        return len(self._flags)

    def __bool__(self):
        return bool(self._flags)

    def __repr__(self):
        return f"instruction({', '.join(map(repr, self._flags))})"


def parse(tokens, /):
    """
    Parse a flat token sequence into an Instruction.

    Shortcut for Instruction.from_tokens(tokens).
    """
    return Instruction.from_tokens(tokens)


__all__ = (
    "Flag",
    "Instruction",
    "parse",
)
