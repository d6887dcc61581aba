"""
Framy command layer: declare, validate, resolve and execute commands.

What this module provides
- Command: base class of every command.
  • configure() declares the command's name, help text and schema (arguments/options).
  • Construction binds the supplied positional tokens and options, validating
    their counts against the declared schema (ValidationError on mismatch).
  • build() wraps construction into a Built(command, fault) result so callers
    decide how to report a failure.
  • describe() returns the immutable Schema of a command type without binding.
- Registry: explicit mapping from type name ("CreateCommand") to command type.
  • resolve(token) turns a user token ("create") into a type, falling back to
    HelpCommand for anything unknown.
- HelpCommand, InstallCommand, CreateCommand: the registered commands.

Core ideas
- Every instance declares fresh Argument objects in configure(); schemas are
  never shared between instances or types.
- Validation is cardinality-only: argument values and option names are not checked.
- Side effects go through a collaborator (see framy.collaborators) so failures
  come back as values and surface as CollaboratorFailure faults.

Quick start
    from framy.commands import catalog

    built = catalog.resolve("create").build((), ("Demo",))
    if built.ok:
        built.command.execute()
"""
import functools
import operator
import re
import sys
from collections.abc import Mapping
from typing import NamedTuple

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .arguments import Argument, Option
from .collaborators import ShellCollaborator
from .faults import *
from .faults import terminal as _terminal
from .utils import *

PROGRAM = "FramyInstaller"

INSTALL_DIR = "/usr/bin/FramyInstaller"

REPOSITORY = "https://github.com/FramyFramework/Framy.git"


def _typename(token, /):
    """
    Build the candidate type name for a user token: "create" -> "CreateCommand".

    Only the first character is upper-cased; the rest of the token is kept as typed.
    """
    return token[:1].upper() + token[1:] + "Command"


def _token(typename, /):
    """Inverse of _typename for display: "CreateCommand" -> "create"."""
    stem = typename.removesuffix("Command")
    return stem[:1].lower() + stem[1:]


def _expectation(required, total, word, /):
    """Human-readable count expectation: "1 argument", "0 to 1 arguments"."""
    if required == total:
        return pluralize(word, total)
    return f"{required} to {pluralize(word, total)}"


class CommandType(type):
    """
    Metaclass for commands.

    Responsibilities
    - Derive __typename__ from the class name ("create-command") for messages.
    - Expose the names listed in __introspectable__ as read-only properties.
    - Provide stable __repr__/__rich_repr__ for diagnostics.
    """
    __introspectable__ = ()

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
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Schema(NamedTuple):
    """immutable description of a command type (see Command.describe)."""
    name: str
    help: str
    arguments: tuple[Argument, ...]
    options: tuple[Option, ...]


class Built(NamedTuple):
    """result of Command.build: exactly one of command/fault is set."""
    command: "Command | None"
    fault: ValidationError | None

    @property
    def ok(self):
        return self.fault is None


class Registry(Mapping):
    """
    Explicit name → command type mapping.

    Keys are type names ("HelpCommand"). Lookups from user input go through
    resolve(), which never fails: unknown tokens map to the default type.
    """

    def __init__(self, default="HelpCommand"):
        self._types = {}
        self._default = default

    def __getitem__(self, name):
        return self._types[name]

    def __iter__(self):
        return iter(self._types)

    def __len__(self):
        return len(self._types)

    def register(self, cls, /):
        """
        Register a command type under its class name (usable as a class decorator).

        Raises
        - TypeError: when cls is not a Command subclass (the base itself is rejected).
        - ValueError: when the name is already registered to another type.
        """
        if not isinstance(cls, type) or not issubclass(cls, Command) or cls is Command:
            raise TypeError("register() argument must be a command subclass")
        if self._types.setdefault(name := cls.__name__, cls) is not cls:
            raise ValueError(f"command name {name!r} is already in use")
        return cls

    def lookup(self, token, /):
        """Return the command type for a user token, or None when unknown."""
        if not isinstance(token, str) or (name := _typename(token)) == Command.__name__:
            return None
        return self._types.get(name)

    def resolve(self, token, /):
        """Return the command type for a user token, defaulting to the help command."""
        return self.lookup(token) or self._types[self._default]

    def tokens(self):
        """(token, type) pairs in registration order, e.g. ("help", HelpCommand)."""
        return [(_token(name), cls) for name, cls in self._types.items()]


catalog = Registry()


class Command(metaclass=CommandType):
    """
    Base command: declared schema, supplied values, execute contract.

    Lifecycle
    - __init__(options, arguments, **context) runs configure(), then
      set_arguments(arguments), then set_options(options). A ValidationError
      leaves no usable instance behind.
    - execute() only runs on a fully validated instance.

    Context keywords
    - registry: Registry used by commands that inspect other commands.
    - collaborator: object providing copy()/clone() (defaults to ShellCollaborator).
    - terminal: rich console receiving all output.
    - program: path of the running program (defaults to sys.argv[0]).
    """

    __introspectable__ = (
        "name",
        "help",
        "arguments",
        "options",
    )

    def __init__(
            self,
            options=(),
            arguments=(),
            /,
            *,
            registry=Unset,
            collaborator=Unset,
            terminal=Unset,
            program=Unset,
    ):
        self._prepare(registry=registry, collaborator=collaborator, terminal=terminal, program=program)
        self.configure()
        self.set_arguments(arguments)
        self.set_options(options)

    def _prepare(self, *, registry=Unset, collaborator=Unset, terminal=Unset, program=Unset):
        self._name = None
        self._help = ""
        self._declared = []
        self._accepted = []
        self._arguments = []
        self._options = []
        self._registry = coalesce(registry, catalog)
        self._collaborator = collaborator if collaborator is not Unset else ShellCollaborator()
        self._terminal = coalesce(terminal, _terminal)
        self._program = coalesce(program, sys.argv[0] if sys.argv else PROGRAM)

    @classmethod
    def build(cls, options=(), arguments=(), /, **context):
        """
        Construct a command, returning Built(command, None) or Built(None, fault).

        Only ValidationError is captured; programming errors still propagate.
        """
        try:
            return Built(cls(options, arguments, **context), None)
        except ValidationError as fault:
            return Built(None, fault)

    @classmethod
    def describe(cls):
        """Return the Schema declared by configure(), without binding any values."""
        self = cls.__new__(cls)
        self._prepare()
        self.configure()
        return Schema(self._name, self._help, tuple(self._declared), tuple(self._accepted))

    @property
    def declared(self):
        """declared Argument slots, in positional order."""
        return tuple(self._declared)

    @property
    def accepted(self):
        """declared Option shapes."""
        return tuple(self._accepted)

    @property
    def registry(self):
        return self._registry

    @property
    def collaborator(self):
        return self._collaborator

    @property
    def terminal(self):
        return self._terminal

    @property
    def program(self):
        return self._program

    def configure(self):
        """Hook run once at construction; subclasses declare name, help and schema here."""

    def execute(self):
        """Run the command. The base command does nothing."""

    def declare(self, *arguments, options=()):
        """
        Declare the positional arguments (and option shapes) this command accepts.

        Replaces any previous declaration; meant to be called from configure().
        """
        for argument in arguments:
            if not isinstance(argument, Argument):
                raise TypeError(f"{type(self).__typename__} arguments must be Argument instances")
        for option in options:
            if not isinstance(option, Option):
                raise TypeError(f"{type(self).__typename__} options must be Option instances")
        self._declared = list(arguments)
        self._accepted = list(options)
        return self

    def set_arguments(self, arguments):
        """
        Bind supplied positional tokens to the declared arguments by position.

        Optional (required=False) declared arguments may be left out; omitted
        slots are reset to None.

        Raises
        - ValidationError: when the count falls outside the declared range.
        """
        arguments = list(arguments)
        required = sum(argument.required for argument in self._declared)
        total = len(self._declared)

        if not required <= len(arguments) <= total:
            raise ValidationError(
                "Command argument not valid",
                code=FaultCode.ARGUMENT_MISMATCH,
                title="invalid arguments",
                hint=f"{self._name or PROGRAM} expects {_expectation(required, total, 'argument')}"
                     f" but received {len(arguments)}",
            )

        for index, argument in enumerate(self._declared):
            argument.value = arguments[index] if index < len(arguments) else None
        self._arguments = arguments

    def set_options(self, options):
        """
        Store supplied option tokens verbatim.

        Raises
        - ValidationError: when the count differs from the declared options.
        """
        options = list(options)
        if len(options) != len(self._accepted):
            raise ValidationError(
                "Command options not valid",
                code=FaultCode.OPTION_MISMATCH,
                title="invalid options",
                hint=f"{self._name or PROGRAM} expects {pluralize('option', len(self._accepted))}"
                     f" but received {len(options)}",
            )
        self._options = options

    def get_argument(self, name):
        """Return the declared Argument called name, or None."""
        for argument in self._declared:
            if argument.name == name:
                return argument
        return None

    def set_name(self, name):
        """
        Set the command name; parts may be separated by single colons ("app:cache:clear").

        Raises
        - ValidationError: for empty names or leading, trailing or doubled colons.
        """
        if not isinstance(name, str) or not re.fullmatch(r"[^:]+(?::[^:]+)*", name):
            raise ValidationError(
                f"Command name {name!r} is invalid.",
                code=FaultCode.INVALID_NAME,
                title="invalid name",
                hint="names are non-empty and parts are separated by single colons",
            )
        self._name = name
        return self

    def set_help(self, help):
        self._help = help
        return self

    def echo(self, message, style=""):
        """Print one line on the command's terminal (never interpreted as markup)."""
        self._terminal.print(Text(message, style))


@catalog.register
class HelpCommand(Command):
    """
    Lists the registered commands, or details the one named by its argument.
    """

    def configure(self):
        self.set_name("HelpCommand").set_help("The Help command displays help for a given command.")
        self.declare(Argument("Name", "The name of the command you want to get help of", required=False))

    def execute(self):
        self.echo("Help Command", "bold")

        if (target := self.get_argument("Name").value) is None:
            return self._overview()

        if (cls := self.registry.lookup(target)) is None:
            self.echo(f"There is no command named '{target}'.", "yellow")
            return self._overview()

        self._details(target, cls.describe())

    def _overview(self):
        table = Table(box=ROUNDED, show_edge=True, expand=False)
        table.add_column("command", no_wrap=True)
        table.add_column("usage", no_wrap=True)
        table.add_column("description")
        for token, cls in self.registry.tokens():
            schema = cls.describe()
            table.add_row(Text(token), Text(_usage(token, schema)), Text(schema.help.strip()))
        self.terminal.print(table)

    def _details(self, token, schema):
        self.echo(f"Usage: {_usage(token, schema)}")
        if schema.help:
            self.echo(schema.help.strip())
        if not schema.arguments:
            return
        table = Table(box=ROUNDED, show_header=True)
        table.add_column("argument", no_wrap=True)
        table.add_column("description")
        for argument in schema.arguments:
            table.add_row(Text(argument.name if argument.required else f"[{argument.name}]"), Text(argument.descr))
        self.terminal.print(table)


def _usage(token, schema, /):
    """Usage line for a command schema: "FramyInstaller create <ProjectName>"."""
    parts = [PROGRAM, token]
    for argument in schema.arguments:
        parts.append(f"<{argument.name}>" if argument.required else f"[{argument.name}]")
    for option in schema.options:
        parts.append(f"[{option.name}]")
    return " ".join(parts)


@catalog.register
class InstallCommand(Command):
    """
    Copies the running program to INSTALL_DIR.
    """

    def configure(self):
        self.set_name("InstallCommand").set_help(f"Installs {PROGRAM} to '{INSTALL_DIR}' so it can be used from anywhere.")

    def execute(self):
        self.echo(f"Installing {PROGRAM}...")
        outcome = self.collaborator.copy(self.program, INSTALL_DIR)
        if not outcome.ok:
            raise InstallationError(
                f"Could not copy '{self.program}' to '{INSTALL_DIR}'.",
                error=outcome.error,
                detail=outcome.detail,
            )
        self.echo(f"Copied file to '{INSTALL_DIR}'")
        self.echo(f"Successfully installed! Use {PROGRAM}", "green")


@catalog.register
class CreateCommand(Command):
    """
    Clones the Framy repository into a new directory named after the project.
    """

    def configure(self):
        self.set_name("CreateCommand").set_help(
            "Usage: Navigate to the directory in which your project shall be located"
            f" and execute: '{PROGRAM} create NewProject'"
        )
        self.declare(Argument("ProjectName", "Name of the newly created project"))

    def execute(self):
        project = self.get_argument("ProjectName").value
        self.echo(f"Creating new Project: {project}")
        outcome = self.collaborator.clone(REPOSITORY, project)
        if not outcome.ok:
            raise CreationError(
                f"Could not clone '{REPOSITORY}' into '{project}'.",
                error=outcome.error,
                detail=outcome.detail,
            )
        self.echo(f"Done navigate there using 'cd {project}'", "green")


__all__ = (
    "PROGRAM",
    "INSTALL_DIR",
    "REPOSITORY",
    "Schema",
    "Built",
    "Registry",
    "catalog",
    "Command",
    "HelpCommand",
    "InstallCommand",
    "CreateCommand",
)
