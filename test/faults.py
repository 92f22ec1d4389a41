"""
Fault and outcome tests.

Scope
- FaultCode stability and host relabeling through __main__.__codes__.
- Outcome truthiness, unwrap() and repr.
- Rich rendering of faults (plain and paneled), with colors disabled for
  deterministic comparisons.
"""
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from argbind.faults import *


def _fault(**overrides):
    return MissingValueError(
        "option '--count' at first position requires a value",
        **{
            "title": "missing option value",
            "code": FaultCode.MISSING_VALUE,
            "hint": "pass an integer value after it",
            "name": "--count",
            "index": 0,
        } | overrides
    )


def _render(renderable):
    console = Console(color_system=None, force_terminal=False, width=100)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestFaultCode(TestCase):
    def testCodesAreStable(self):
        self.assertEqual(FaultCode.INVALID_NAME, 21101)
        self.assertEqual(FaultCode.DUPLICATE_NAME, 21102)
        self.assertEqual(FaultCode.UNKNOWN_ARGUMENT, 21111)
        self.assertEqual(FaultCode.MISSING_VALUE, 21112)
        self.assertEqual(FaultCode.CONVERSION_FAILED, 21113)
        self.assertEqual(FaultCode.TOO_MANY_POSITIONALS, 21121)
        self.assertEqual(FaultCode.MISSING_POSITIONAL, 21122)
        self.assertEqual(FaultCode.MALFORMED_PROMPT, 21131)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "21112")

    def testNormalizeUsesHostCodes(self):
        import __main__
        with patch.object(__main__, "__codes__", {FaultCode.MISSING_VALUE: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")


class TestFaults(TestCase):
    def testHierarchy(self):
        for cls in (InvalidNameError, DuplicateNameError):
            self.assertTrue(issubclass(cls, RegistrationFault))
        for cls in (
                UnknownArgumentError,
                MissingValueError,
                ConversionError,
                UnexpectedValueError,
                TooManyPositionalsError,
                MissingPositionalError,
                MalformedPromptError,
        ):
            self.assertTrue(issubclass(cls, ParseFault))
        self.assertTrue(issubclass(ArgumentFault, Exception))

    def testOptionsAreReadOnly(self):
        fault = _fault()
        with self.assertRaises(TypeError):
            fault.options["name"] = "--other"  # NOQA: read-only mapping

    def testStrIsMessage(self):
        self.assertEqual(str(_fault()), "option '--count' at first position requires a value")

    def testReplaceMergesOptions(self):
        fault = _fault().__replace__(prog="tool")
        self.assertIsInstance(fault, MissingValueError)
        self.assertEqual(fault.options["prog"], "tool")
        self.assertEqual(fault.options["name"], "--count")
        self.assertIs(fault.code, FaultCode.MISSING_VALUE)

    def testPlainRendering(self):
        output = _render(_fault(prog="tool", colorful=False))
        self.assertIn("[ tool — 21112 | Missing Option Value ]", output)
        self.assertIn("requires a value", output)
        self.assertIn("→ pass an integer value after it", output)

    def testFancyRendering(self):
        output = _render(_fault(prog="tool", colorful=False, fancy=True))
        self.assertIn("Missing Option Value", output)
        self.assertIn("requires a value", output)


class TestOutcome(TestCase):
    def testSuccess(self):
        outcome = Outcome()
        self.assertTrue(outcome)
        self.assertIsNone(outcome.fault)
        self.assertIsNone(outcome.unwrap())
        self.assertEqual(repr(outcome), "Outcome(ok)")

    def testFailure(self):
        fault = _fault()
        outcome = Outcome(fault)
        self.assertFalse(outcome)
        self.assertIs(outcome.fault, fault)
        with self.assertRaises(MissingValueError) as context:
            outcome.unwrap()
        self.assertIs(context.exception, fault)
        self.assertIn("MissingValueError", repr(outcome))

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            Outcome(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
