"""
Text helpers shared by the analysis commands.
"""
import re

WORD = re.compile(r"\S+")
NUMBER = re.compile(r"(?:^|\s)[0-9]+(?!\w)")


def words(text, /):
    """Return every whitespace-delimited token of text, in order."""
    return WORD.findall(text)


def are_anagrams(first, second, /):
    return len(first) == len(second) and sorted(first) == sorted(second)


def are_palindromes(first, second, /):
    """True when first reads exactly as second reversed."""
    return len(first) == len(second) and first == second[::-1]


def matching(source, references, predicate, /):
    """
    Distinct source words matching any reference word, in first-seen order.
    """
    found = {}
    for word in source:
        if word not in found and any(predicate(word, reference) for reference in references):
            found[word] = None
    return list(found)


def prefix(flag, /):
    return f"<{flag.name}> "


def structure(flag, items, /):
    """
    Render a list result as a brace block:

        <-s> {
            "alpha",
            "beta",
        }

    or "<-s> { }" when empty.
    """
    if not items:
        return prefix(flag) + "{ }"
    return prefix(flag) + "{\n" + "".join(f'    "{item}",\n' for item in items) + "}"


def comparator(reverse, by_length, /):
    """Return sort keyword arguments for the given direction and target."""
    return {"key": len if by_length else None, "reverse": reverse}


__all__ = (
    "WORD",
    "NUMBER",
    "words",
    "are_anagrams",
    "are_palindromes",
    "matching",
    "prefix",
    "structure",
    "comparator",
)
