"""
Text analysis commands.

Operational commands (report a result on execute)
- -n  / --newlines        count of "\\n" in the source
- -d  / --digits          count of ASCII digit characters
- -dd / --numbers         count of standalone numeric tokens
- -c  / --chars           source length minus the synthetic trailing newline
- -w  / --words           count of whitespace-delimited tokens
- -a  / --anagrams        distinct source words that are anagrams of a reference word (must be last)
- -p  / --palindromes     distinct source words reading as a reversed reference word (must be last)
- -s  / --sorted          source words, ascending
- -rs / --reverse-sorted  source words, descending
- -si / --size            source file size in B/KB/MB/GB

Modifying commands (alter another flag during validate)
- -l  / --by-length       switches the following sort flag to length ordering

Digits and numbers are different metrics on purpose: "-d" counts every digit
character anywhere, "-dd" counts numeric tokens standing on their own.

__commands__ lists the commands in registration order for Engine.include().
"""
import logging
import math
from abc import abstractmethod

from . import files
from .commands import Command
from .faults import ExecutionError, FaultCode, ValidationError
from .outputs import Output
from .text import *

log = logging.getLogger(__name__)

BY_LENGTH = 1


class CountLines(Command):
    caller = "-n"
    alias = "--newlines"

    def execute(self, flag, operations):
        return Output.ok(prefix(flag) + "New lines: " + str(operations.source.count("\n")))


class CountDigits(Command):
    caller = "-d"
    alias = "--digits"

    DIGITS = frozenset("0123456789")

    def execute(self, flag, operations):
        count = sum(char in self.DIGITS for char in operations.source)
        return Output.ok(prefix(flag) + f"Digits: {count}")


class CountNumbers(Command):
    caller = "-dd"
    alias = "--numbers"

    def execute(self, flag, operations):
        return Output.ok(prefix(flag) + f"Numbers: {len(NUMBER.findall(operations.source))}")


class CountChars(Command):
    """Reports len(source) - 1, discounting the newline added when loading."""
    caller = "-c"
    alias = "--chars"

    def execute(self, flag, operations):
        return Output.ok(prefix(flag) + f"Chars: {max(len(operations.source) - 1, 0)}")


class CountWords(Command):
    caller = "-w"
    alias = "--words"

    def execute(self, flag, operations):
        return Output.ok(prefix(flag) + f"Words: {len(words(operations.source))}")


class _ShowMatching(Command):
    """
    Shared body of the anagram and palindrome commands.

    Validation
    - the flag must be the last one (no flag at position + 1);
    - the flag requires the reference text as its argument.
    """

    @staticmethod
    @abstractmethod
    def predicate(word, reference): ...

    def validate(self, flag, instruction, operations):
        if instruction.at(flag.position + 1) is not None:
            raise ValidationError(
                "This flag should be the last one",
                flag=flag.name,
                code=FaultCode.NOT_LAST
            )
        if flag.empty:
            raise ValidationError(
                "This flag requires an argument!",
                flag=flag.name,
                code=FaultCode.MISSING_ARGUMENT
            )
        return Output.ok()

    def execute(self, flag, operations):
        found = matching(words(operations.source), words(flag.argument), self.predicate)
        return Output.ok(structure(flag, found))


class ShowAnagrams(_ShowMatching):
    caller = "-a"
    alias = "--anagrams"
    predicate = staticmethod(are_anagrams)


class ShowPalindromes(_ShowMatching):
    caller = "-p"
    alias = "--palindromes"
    predicate = staticmethod(are_palindromes)


class ShowWords(Command):
    """Source words ascending; by length when the flag's modifier is BY_LENGTH."""
    caller = "-s"
    alias = "--sorted"

    reverse = False

    def execute(self, flag, operations):
        ordered = sorted(words(operations.source), **comparator(self.reverse, flag.modifier == BY_LENGTH))
        return Output.ok(structure(flag, ordered))


class ShowWordsReverse(ShowWords):
    caller = "-rs"
    alias = "--reverse-sorted"

    reverse = True


class ShowFileSize(Command):
    """
    Size of the source file, scaled by 1000 per unit step and rounded half-up
    to two decimals. Sizes beyond the last unit stay in GB.
    """
    caller = "-si"
    alias = "--size"

    UNITS = ("B", "KB", "MB", "GB")

    def execute(self, flag, operations):
        try:
            size = float(files.size(operations.file_in))
        except OSError:
            log.warning("can't stat source file %r", operations.file_in, exc_info=True)
            raise ExecutionError(
                "Can't read the size of the source file!",
                flag=flag.name,
                code=FaultCode.UNREADABLE_FILE
            ) from None

        for unit in self.UNITS:
            if size < 1000 or unit == self.UNITS[-1]:
                break
            size /= 1000

        size = math.floor(size * 100 + 0.5) / 100
        return Output.ok(prefix(flag) + f"{size:g} {unit}")


class WordsConsiderLength(Command):
    """
    Switches the next sort flag (-s/-rs) to length ordering by setting its
    modifier. Another -l may sit in between; the last one of a chain does the
    switch.
    """
    caller = "-l"
    alias = "--by-length"

    def validate(self, flag, instruction, operations):
        if (follower := instruction.at(flag.position + 1)) is None:
            raise ValidationError(
                "This flag can't be the last one!",
                flag=flag.name,
                code=FaultCode.DANGLING_MODIFIER
            )

        if follower.named(self.caller, self.alias):
            return Output.ok()

        if not follower.named(ShowWords.caller, ShowWords.alias, ShowWordsReverse.caller, ShowWordsReverse.alias):
            raise ValidationError(
                "Missing required flag after this one!",
                flag=flag.name,
                code=FaultCode.MISSING_FOLLOWER
            )

        follower.modifier = BY_LENGTH
        log.debug("flag %r at position %d sorts by length", follower.name, follower.position)
        return Output.ok()

    def execute(self, flag, operations):
        return Output.undefined()


__commands__ = (
    CountChars,
    CountDigits,
    CountLines,
    CountNumbers,
    CountWords,
    ShowAnagrams,
    ShowFileSize,
    ShowPalindromes,
    ShowWords,
    ShowWordsReverse,
    WordsConsiderLength,
)

__all__ = (
    "BY_LENGTH",
    "CountLines",
    "CountDigits",
    "CountNumbers",
    "CountChars",
    "CountWords",
    "ShowAnagrams",
    "ShowPalindromes",
    "ShowWords",
    "ShowWordsReverse",
    "ShowFileSize",
    "WordsConsiderLength",
)
