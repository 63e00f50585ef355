"""
Whole-file I/O used by the commands and the engine.

All operations are blocking and read or write the whole file at once. Callers
treat any OSError from read()/size() as "file invalid".
"""
import logging
import os.path

log = logging.getLogger(__name__)


def exists(path, /):
    """Return True when path names a readable regular file."""
    return bool(path) and os.path.isfile(path) and os.access(path, os.R_OK)


def read(path, /, encoding="utf-8"):
    """
    Read the whole file line by line, appending a newline after every line.

    The last line is followed by a newline too, so "a" loads as "a\\n" and
    "a\\n" loads as "a\\n\\n": the loaded text is always one character longer
    than the raw content.
    """
    with open(path, encoding=encoding, newline="") as stream:
        content = stream.read()
    log.debug("read %d character(s) from %r", len(content), path)
    return "".join(line + "\n" for line in content.split("\n"))


def write(path, content, /, encoding="utf-8"):
    """Overwrite the file with the given content."""
    with open(path, "w", encoding=encoding, newline="") as stream:
        stream.write(content)
    log.debug("wrote %d character(s) to %r", len(content), path)


def size(path, /):
    """Return the file size in bytes."""
    return os.path.getsize(path)


__all__ = (
    "exists",
    "read",
    "write",
    "size",
)
