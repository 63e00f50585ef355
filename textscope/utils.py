"""
textscope utilities (internal helpers shared by the flag model, the command
layer and the faults).

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not declared" (e.g. the caller/alias of an
    abstract command), distinct from None and "".

- coalesce(value, default=None)
  • Replace Unset with a concrete default, keeping legitimate falsey values.

- mirror("attr")
  • Read-only property exposing the private backing field self._attr.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce("", "fallback")
    ''
"""
import functools
from typing import final


@final
class UnsetType:
    """
    Sentinel type of values that were never declared.

    bool(Unset) is False and repr(Unset) is "Unset"; the type is a
    non-subclassable singleton.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """Return object, or default when object is Unset."""
    return default if object is Unset else object


def mirror(name, /):
    """
    Define a read-only property returning self._<name>.

    Backing fields hold immutable values only (str, int, enum members,
    tuples), so the property hands them out directly.

    Example
        class Flag:
            name = mirror("name")   # exposes self._name
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise TypeError("mirror() argument must be an identifier")

    field = "_" + name

    def getter(self):
        return getattr(self, field)

    getter.__name__ = getter.__qualname__ = name
    return property(getter, doc=f"Read-only view of {field}.")


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
