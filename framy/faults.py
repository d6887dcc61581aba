"""
Framy faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain so logs and searches stay predictable.
- CommandException: base type carrying a message + options that knows how to
  render itself through rich and which exit status it maps to.
- ValidationError: the supplied tokens do not fit a command's declared schema,
  or a command was configured with an invalid name.
- CollaboratorFailure (InstallationError, CreationError): an external
  operation (file copy, repository clone) did not complete.
- trigger(): central entry point to surface any fault on a terminal.

Integration
- Commands raise faults; the console catches them, calls trigger(fault, ...)
  and turns the returned status into the process exit code.
- Hosts can restyle output with a __styles__ mapping, relabel the program with
  __prog__ and remap codes with __codes__, all looked up in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

terminal = Console(highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping
    - validation (111xx): INVALID_NAME, ARGUMENT_MISMATCH, OPTION_MISMATCH
    - collaborators (131xx): INSTALLATION_FAILED, CREATION_FAILED
    """
    # --- validation errors (111xx) ---
    INVALID_NAME                = 11101
    ARGUMENT_MISMATCH           = 11111
    OPTION_MISMATCH             = 11112

    # --- collaborator errors (131xx) ---
    INSTALLATION_FAILED         = 13101
    CREATION_FAILED             = 13102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base fault: a message plus read-only rendering options.

    options
    - code: FaultCode shown in the header.
    - title: short header title (title-cased on render).
    - hint: one actionable sentence shown after the message.
    - terminal: rich console the fault is printed on by trigger().
    - program: label used in the header when __main__ has no __prog__.
    - fancy / colorful: panel chrome and styling toggles.
    """
    __status__ = 1
    __defaults__ = {}

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType({
            "title": "error",
            "hint": "",
            "program": "FramyInstaller",
            "fancy": False,
            "colorful": True,
        } | type(self).__defaults__ | options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def status(self):
        """exit status the console returns after reporting this fault."""
        return type(self).__status__

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options["program"]), styler("prog-name"))
        code = self.code.normalize() if self.code is not None else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        parts = [message]
        if self.options["hint"]:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if self.options["fancy"]:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self):
        self.options.get("terminal", terminal).print(self)
        return self.status

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replica = type(self).__new__(type(self))
        CommandException.__init__(replica, self.message, **{**self.options, **overrides})
        replica.__dict__.update({
            name: object for name, object in self.__dict__.items() if name not in ("message", "options")
        })
        return replica


class ValidationError(CommandException):
    """supplied tokens or configuration do not match a command's declared schema."""
    __defaults__ = {"title": "invalid command"}


class CollaboratorFailure(CommandException):
    """
    an external operation failed; the process keeps its state and exits non-zero.

    attributes
    - error: the underlying OSError (or None when the operation ran but failed).
    - detail: captured diagnostic output (stderr of a subprocess, error text).
    """
    __status__ = 2

    def __init__(self, message=Unset, /, *, error=None, detail="", **options):
        super().__init__(message, **options)
        self.error = error
        self.detail = detail

    def __rich__(self):
        renderable = super().__rich__()
        if not self.detail:
            return renderable
        return Group(renderable, Text(self.detail.strip(), "dim" if self.options["colorful"] else ""))


class InstallationError(CollaboratorFailure):
    __defaults__ = {
        "code": FaultCode.INSTALLATION_FAILED,
        "title": "installation failed",
        "hint": "check write permissions on the installation directory",
    }


class CreationError(CollaboratorFailure):
    __defaults__ = {
        "code": FaultCode.CREATION_FAILED,
        "title": "creation failed",
        "hint": "make sure git is installed and the target directory does not exist",
    }


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options and return its exit status.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.

    typical options
    - terminal, fancy, colorful, program.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    return fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "ValidationError",
    "CollaboratorFailure",
    "InstallationError",
    "CreationError",
    "FaultCode",
    "trigger",
)
