"""
Framy console: turn a raw argument vector into one executed command.

Flow
- Console(argv) prints the welcome banner, resolves argv[1] through the registry
  (unknown or missing names fall back to the help command), partitions the
  remaining tokens into options and arguments and builds the command.
- Console.run() reports a build fault (exit 1), or executes the command and
  reports a collaborator failure (exit 2); success is 0.
- main() is the process entry point (console script "FramyInstaller").

Example
    >>> from framy.console import partition
    >>> partition(["-v", "MyProj", "--dry-run"])
    (['-v', '--dry-run'], ['MyProj'])
"""
import sys

from rich.text import Text

from .arguments import is_option
from .commands import PROGRAM, catalog
from .faults import *
from .faults import terminal as _terminal
from .utils import *

VERSION = "v0.1-alpha.1"

EXIT_SUCCESS = 0


def partition(tokens, /):
    """
    Split tokens into (options, arguments), preserving relative order in each.

    Options are tokens starting with the option marker ("-"); everything else
    is a positional argument.
    """
    options = []
    arguments = []
    for token in tokens:
        (options if is_option(token) else arguments).append(token)
    return options, arguments


class Console:
    """
    Dispatcher for a single invocation.

    Keywords
    - registry: command registry to resolve against (defaults to framy.commands.catalog).
    - collaborator: forwarded to the command (copy/clone operations).
    - terminal: rich console receiving banner, command output and faults.
    - fancy / colorful: fault rendering toggles (panel chrome, styling).
    """

    def __init__(
            self,
            argv,
            /,
            *,
            registry=Unset,
            collaborator=Unset,
            terminal=Unset,
            fancy=False,
            colorful=True,
    ):
        argv = list(argv)
        self._registry = coalesce(registry, catalog)
        self._terminal = coalesce(terminal, _terminal)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

        self._welcome()

        # argv[0] is the program, argv[1] the command name; both are consumed
        self._type = self._registry.resolve(argv[1] if len(argv) > 1 else "")
        self._options, self._arguments = partition(argv[2:])

        context = {"registry": self._registry, "terminal": self._terminal}
        if collaborator is not Unset:
            context["collaborator"] = collaborator
        if argv:
            context["program"] = argv[0]
        self._command, self._fault = self._type.build(self._options, self._arguments, **context)

    @property
    def type(self):
        """resolved command type."""
        return self._type

    @property
    def command(self):
        """built command, or None when validation failed."""
        return self._command

    @property
    def fault(self):
        """validation fault raised while building, or None."""
        return self._fault

    @property
    def options(self):
        return tuple(self._options)

    @property
    def arguments(self):
        return tuple(self._arguments)

    def _welcome(self):
        self._terminal.print(Text(f"{PROGRAM} {VERSION}", "bold" if self._colorful else ""))
        self._terminal.print(Text("The Framy Framework manager!"))
        self._terminal.print()

    def _report(self, fault):
        return trigger(
            fault,
            terminal=self._terminal,
            fancy=self._fancy,
            colorful=self._colorful,
            program=PROGRAM,
        )

    def run(self):
        """Execute the resolved command and return the process exit status."""
        if self._fault is not None:
            return self._report(self._fault)
        try:
            self._command.execute()
        except CollaboratorFailure as fault:
            return self._report(fault)
        return EXIT_SUCCESS


def main(argv=None):
    """Console-script entry point: run one command from argv (default sys.argv)."""
    return Console(sys.argv if argv is None else argv).run()


__all__ = (
    "VERSION",
    "partition",
    "Console",
    "main",
)
