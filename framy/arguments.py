r"""
Framy argument specifications.

Overview
- Argument: named, described positional slot holding one runtime-supplied value.
  • Declared by a command inside configure(); bound later when the command
    receives its positional tokens.
  • required=False lets a trailing slot be omitted (e.g., help's command name).
- Option: named, described flag-style shape (tokens start with MARKER).
  • Supplied options are kept as raw strings by the command; Option only
    documents what a command accepts.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ via read-only properties.

Quick example:
    >>> from framy.arguments import Argument, is_option
    >>> project = Argument("ProjectName", "Name of the newly created project")
    >>> project.value = "Demo"
    >>> project.value
    'Demo'
    >>> is_option("--dry-run"), is_option("Demo")
    (True, False)
"""
import functools
import operator
import re

from .utils import *

MARKER = "-"


def is_option(token, /):
    """True when a raw token is option-like (starts with the MARKER)."""
    return isinstance(token, str) and token.startswith(MARKER)


class ArgumentType(type):
    """
    Metaclass for argument specs.

    Responsibilities
    - Derive __typename__ from the class name for messages ("argument", "option").
    - Expose the names listed in __introspectable__ as read-only properties.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the shared 'name' and 'descr' fields in place.

    Raises
    - TypeError: if 'name' or 'descr' is not a string.
    - ValueError: if 'name' is empty after trimming.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = descr.strip()


class Argument(metaclass=ArgumentType):
    """
    Positional, value-bearing slot of a command.

    Properties
    - name, descr, required: read-only, fixed at declaration.
    - value: None until the owning command binds a supplied token; writable
      without validation.
    """

    __introspectable__ = (
        "name",
        "descr",
        "required",
    )
    __displayable__ = (
        "name",
        "descr",
        "required",
        "value",
    )

    def __init__(self, name, descr="", /, *, required=True):
        metadata = {"name": name, "descr": descr}
        _sanitize_metadata(type(self), metadata)
        self._name = metadata["name"]
        self._descr = metadata["descr"]
        self._required = bool(required)
        self._value = None

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = value


class Option(metaclass=ArgumentType):
    """
    Flag-style option shape, e.g. Option("--dry-run", "Print instead of running").

    The name must start with MARKER; supplied option tokens are stored verbatim
    by the command and only counted against its declared options.
    """

    __introspectable__ = (
        "name",
        "descr",
    )

    def __init__(self, name, descr="", /):
        metadata = {"name": name, "descr": descr}
        _sanitize_metadata(type(self), metadata)
        if not is_option(metadata["name"]):
            raise ValueError(f"{type(self).__typename__} 'name' must start with {MARKER!r}")
        self._name = metadata["name"]
        self._descr = metadata["descr"]


__all__ = (
    "MARKER",
    "is_option",
    "Argument",
    "Option",
)
