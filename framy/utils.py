"""
Framy utilities (small internal helpers shared by the command layer).

Overview
- UnsetType / Unset
  • Singleton sentinel for "not provided", distinct from None.
- coalesce(value, default=None)
  • Replace Unset with a concrete default; None and other falsey values pass through.
- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors.
- mirror("attr")
  • Read-only property exposing a private backing field (self._attr) as a copy.
- pluralize(word, count)
  • Tiny English pluralizer for fault messages ("1 argument", "2 arguments").
"""
import builtins
import functools
from collections.abc import Sequence, Mapping
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false, printable as "Unset", non-subclassable.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
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
    Resolve the Unset sentinel to a concrete default.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            callable.__qualname__ = name
            callable.__name__ = name
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _detach(object):
    """
    Copy container values so callers cannot mutate internal state.

    Sequences (non-string) become tuples and mappings become dicts; anything
    else is returned as-is (Unset is materialized to None).
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return dict(object)
    return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property that mirrors the backing attribute "_{name}".

    Example
        class Command:
            name = mirror("name")   # reads self._name
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(word, count, /):
    """
    Return "<count> <word>" with a naive English plural when count != 1.

    Examples
    - pluralize("argument", 1) -> "1 argument"
    - pluralize("option", 0)   -> "0 options"
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    if count == 1:
        return f"{count} {word}"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return f"{count} {word}es"
    return f"{count} {word}s"


Unset = UnsetType()
"""
Internal sentinel for "not provided".

Use Unset as a keyword default when None is meaningful, then materialize it
with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
