"""
External operations invoked by commands (file copy, repository clone).

Commands never touch the filesystem or spawn processes themselves; they ask a
collaborator and branch on the returned Outcome. ShellCollaborator is the
real implementation; tests substitute an in-memory fake with the same methods.
"""
import os.path
import shutil
import subprocess
from typing import NamedTuple, Protocol


class Outcome(NamedTuple):
    """
    result of one external operation.

    - ok: True when the operation completed.
    - detail: captured diagnostic text (process output or error message).
    - error: the OSError raised by the operation, if any.
    """
    ok: bool
    detail: str = ""
    error: OSError | None = None


class Collaborator(Protocol):
    def copy(self, source: str, destination: str) -> Outcome: ...

    def clone(self, repository: str, directory: str) -> Outcome: ...


class ShellCollaborator:
    """
    Runs operations against the local system.

    copy() uses shutil.copy2 (permissions preserved so the copy stays
    executable); clone() runs "git clone" with captured output.
    """

    def __init__(self, git="git"):
        self.git = git

    def copy(self, source, destination):
        try:
            shutil.copy2(os.path.realpath(source), destination)
        except OSError as error:
            return Outcome(False, str(error), error)
        return Outcome(True)

    def clone(self, repository, directory):
        try:
            process = subprocess.run(
                [self.git, "clone", repository, directory],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as error:
            # git itself could not be started (missing binary, permissions)
            return Outcome(False, str(error), error)
        detail = process.stderr or process.stdout
        return Outcome(process.returncode == 0, detail)


__all__ = (
    "Outcome",
    "Collaborator",
    "ShellCollaborator",
)
