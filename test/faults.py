"""
Faults module behavioral tests (codes, rendering, trigger).

Scope
- Validate header/message/hint rendering with and without styling and panels.
- Validate trigger() option merging and returned exit statuses.
- Validate __replace__ keeps collaborator diagnostics.
- Validate host remapping of codes through __main__.__codes__.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from framy import (
    CommandException,
    ValidationError,
    CollaboratorFailure,
    InstallationError,
    CreationError,
    FaultCode,
    trigger,
)


def _terminal():
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


class TestFaultCode(TestCase):
    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.ARGUMENT_MISMATCH.normalize(), "11111")

    def testNormalizeUsesHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.INVALID_NAME: "E-NAME"}, create=True):
            self.assertEqual(FaultCode.INVALID_NAME.normalize(), "E-NAME")
            self.assertEqual(FaultCode.OPTION_MISMATCH.normalize(), "11112")


class TestRendering(TestCase):
    def testPlainRendering(self):
        terminal = _terminal()
        fault = ValidationError("Command argument not valid", code=FaultCode.ARGUMENT_MISMATCH,
                                title="invalid arguments", hint="create expects 1 argument")
        status = trigger(fault, terminal=terminal, colorful=False)
        self.assertEqual(status, 1)
        lines = [line.rstrip() for line in terminal.file.getvalue().splitlines()]
        self.assertEqual(lines, [
            "[ FramyInstaller — 11111 | Invalid Arguments ]",
            "Command argument not valid",
            " → create expects 1 argument",
        ])

    def testProgramLabelFromHost(self):
        terminal = _terminal()
        main = __import__("__main__")
        with mock.patch.object(main, "__prog__", "framy", create=True):
            trigger(ValidationError("x", code=FaultCode.INVALID_NAME), terminal=terminal)
        self.assertTrue(terminal.file.getvalue().startswith("[ framy — 11101 |"))

    def testFancyRenderingUsesPanel(self):
        terminal = _terminal()
        trigger(CreationError("Could not clone."), terminal=terminal, fancy=True)
        output = terminal.file.getvalue()
        self.assertIn("╭", output)
        self.assertIn("13102", output)
        self.assertIn("Could not clone.", output)

    def testHintIsOptional(self):
        terminal = _terminal()
        trigger(ValidationError("no hint", code=FaultCode.INVALID_NAME), terminal=terminal)
        self.assertNotIn("→", terminal.file.getvalue())

    def testDetailIsShown(self):
        terminal = _terminal()
        trigger(InstallationError("Could not copy.", detail="[Errno 2] No such file\n"), terminal=terminal)
        output = terminal.file.getvalue()
        self.assertIn("[Errno 2] No such file", output)
        self.assertIn("Installation Failed", output)


class TestTrigger(TestCase):
    def testCollaboratorStatusIsTwo(self):
        self.assertEqual(trigger(CreationError("x"), terminal=_terminal()), 2)
        self.assertEqual(InstallationError("x").status, 2)
        self.assertEqual(ValidationError("x").status, 1)

    def testReplaceKeepsDiagnostics(self):
        error = FileNotFoundError(2, "No such file")
        fault = InstallationError("x", error=error, detail="missing")
        replica = fault.__replace__(fancy=True)
        self.assertIsInstance(replica, InstallationError)
        self.assertIs(replica.error, error)
        self.assertEqual(replica.detail, "missing")
        self.assertTrue(replica.options["fancy"])
        self.assertFalse(fault.options["fancy"])

    def testDefaultsPerType(self):
        self.assertEqual(InstallationError("x").code, FaultCode.INSTALLATION_FAILED)
        self.assertEqual(CreationError("x").code, FaultCode.CREATION_FAILED)
        self.assertTrue(issubclass(InstallationError, CollaboratorFailure))
        self.assertTrue(issubclass(ValidationError, CommandException))

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            ValidationError("x").options["hint"] = "y"  # type: ignore[index]

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


if __name__ == "__main__":
    unittest.main()
