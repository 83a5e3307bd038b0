"""
pulpcli utilities (small helpers shared by the descriptor, parser and help layers)

Overview
- UnsetType / Unset
  • Singleton sentinel for “no default declared”, distinct from None, False and "".

- coalesce(value, default=None)
  • Replace Unset with a concrete default, keep every other value (falsey ones included).

- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated functions.

- mirror("attr")
  • Read-only property over a private backing field (self._attr). Containers are
    handed out as frozen snapshots so descriptors stay immutable from the outside.

- ordinal(number)
  • “first”, “second”, … “tenth”, then “11th”, “22nd”, … for position-first messages.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel type for a value that was not provided.

    Falsey, printable as "Unset", sealed against subclassing and a singleton
    per process, so identity checks (`value is Unset`) are always safe.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

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
    """
    Return `object` unless it is Unset, in which case return `default`.

    None, 0, "" and [] are legitimate values and are returned unchanged.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable.

    Two forms are supported:
    - rename(callable, name) renames in place and returns the callable.
    - @rename(name) returns a decorator doing the same.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Recursively snapshot containers into their immutable counterparts.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType over a fresh dict (values frozen, keys kept)
    - Set → frozenset
    - Anything else, Unset included, is returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(map(_freeze, object))
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(zip(object.keys(), map(_freeze, object.values()))))
    elif isinstance(object, Set):
        return frozenset(map(_freeze, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal for a 1-based position.

    1..10 are spelled out ("first"…"tenth"); other numbers use numeric suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


Unset = UnsetType()
"""
Sentinel for “not provided”.

Used as the default of Option.default so a declared default of None, False or ""
stays distinguishable from no default at all.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
