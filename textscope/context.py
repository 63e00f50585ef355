"""
Shared operation context of one engine run.

Every command receives the same Operations instance in both phases. Commands
mutate it during validate (the source-file command stores the path and the
loaded text, the output-file command records the destination); execute
phases only read it.
"""


class Operations:
    """
    Mutable state visible to all commands during one run.

    Attributes
    - source: str, full input text ("" until resolved).
    - file_in: str, source file path ("" if unset).
    - file_out: str, report destination path ("" if unset).
    - panicked: bool, set on the first validation failure.
    """
    __slots__ = ("source", "file_in", "file_out", "panicked")

    def __init__(self, *, source="", file_in="", file_out="", panicked=False):
        self.source = source
        self.file_in = file_in
        self.file_out = file_out
        self.panicked = panicked

    @property
    def resolved(self):
        """True when there is some text to operate on."""
        return bool(self.source or self.file_in)

    def __rich_repr__(self):
        yield "source", self.source if len(self.source) <= 32 else self.source[:29] + "..."
        yield "file_in", self.file_in, ""
        yield "file_out", self.file_out, ""
        yield "panicked", self.panicked, False

    def __repr__(self):
        return "operations(%s)" % ", ".join(map(lambda pair: "%s=%r" % pair[:2], self.__rich_repr__()))


__all__ = (
    "Operations",
)
