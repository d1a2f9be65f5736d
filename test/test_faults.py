"""
Faults module behavioral tests (codes, options, rendering).

Scope
- Validate FaultCode normalization and host remapping through __main__.
- Validate fault options: defaults, read-only mapping, copy.replace merging.
- Validate rich rendering (plain and fancy) without colors.
- Validate that faults are plain exceptions: raised by the matcher, printed by
  the caller.

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured on a colorless console for stable comparisons.
"""

from __future__ import annotations

import copy
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from usagematch import Argument, OneOrMore, match
from usagematch import faults
from usagematch.faults import (
    FaultCode,
    MatchException,
    PatternArityError,
    UnknownPatternError,
    UsageMismatchError,
    getdoc,
)


def render(object):
    console = Console(color_system=None, force_terminal=False, width=120)
    with console.capture() as capture:
        console.print(object)
    return capture.get()


class FaultCodeTest(TestCase):
    """Stable identifiers and host remapping."""

    def testNormalizeDefaultsToNumber(self) -> None:
        self.assertEqual(FaultCode.MALFORMED_PATTERN.normalize(), "21101")

    def testNormalizeUsesHostCodes(self) -> None:
        codes = {FaultCode.USAGE_MISMATCH: "E-USAGE"}
        with mock.patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.USAGE_MISMATCH.normalize(), "E-USAGE")
            self.assertEqual(FaultCode.UNKNOWN_PATTERN.normalize(), "21102")

    def testGetdocWithoutHostDocs(self) -> None:
        self.assertIsNone(getdoc(FaultCode.MALFORMED_PATTERN))

    def testGetdocUsesHostDocs(self) -> None:
        docs = {FaultCode.MALFORMED_PATTERN: "repeat exactly one child"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.MALFORMED_PATTERN), "repeat exactly one child")

    def testGetdocRejectsNonCodes(self) -> None:
        with self.assertRaises(TypeError):
            getdoc(21101)


class FaultOptionsTest(TestCase):
    """Message and options carried by a fault."""

    def setUp(self) -> None:
        self.fault = PatternArityError(
            "one-or-more pattern expects exactly one child, got 2",
            title="malformed pattern",
            code=FaultCode.MALFORMED_PATTERN,
            hint="wrap the children in a required group",
        )

    def testMessage(self) -> None:
        self.assertEqual(self.fault.message, "one-or-more pattern expects exactly one child, got 2")
        self.assertEqual(str(self.fault), "one-or-more pattern expects exactly one child, got 2")

    def testDefaults(self) -> None:
        self.assertEqual(
            dict(self.fault.options),
            {
                "fancy": False,
                "colorful": True,
                "title": "malformed pattern",
                "hint": "wrap the children in a required group",
                "code": FaultCode.MALFORMED_PATTERN,
            },
        )

    def testOptionsAreReadOnly(self) -> None:
        with self.assertRaises(TypeError):
            self.fault.options["fancy"] = True  # type: ignore[index]

    def testReplaceMergesOptions(self) -> None:
        replaced = copy.replace(self.fault, fancy=True)
        self.assertIsInstance(replaced, PatternArityError)
        self.assertEqual(replaced.message, self.fault.message)
        self.assertTrue(replaced.options["fancy"])
        self.assertEqual(replaced.options["hint"], "wrap the children in a required group")
        self.assertFalse(self.fault.options["fancy"])

    def testHierarchy(self) -> None:
        self.assertIsInstance(self.fault, MatchException)
        self.assertIsInstance(self.fault, ValueError)
        self.assertTrue(issubclass(UnknownPatternError, TypeError))
        self.assertFalse(issubclass(UsageMismatchError, ValueError))

    def testRemainingDefaultsToEmpty(self) -> None:
        self.assertEqual(UsageMismatchError("no match").remaining, ())


class RenderingTest(TestCase):
    """Rich rendering of faults."""

    def setUp(self) -> None:
        self.fault = PatternArityError(
            "expects exactly one child",
            title="malformed pattern",
            code=FaultCode.MALFORMED_PATTERN,
            hint="wrap the children in a required group",
            colorful=False,
        )

    def testPlain(self) -> None:
        output = render(self.fault)
        self.assertIn("[ usagematch — 21101 | Malformed Pattern ]", output)
        self.assertIn("expects exactly one child", output)
        self.assertIn("→ wrap the children in a required group", output)

    def testFancy(self) -> None:
        output = render(copy.replace(self.fault, fancy=True))
        self.assertIn("Malformed Pattern", output)
        self.assertIn("expects exactly one child", output)

    def testWithoutHint(self) -> None:
        output = render(copy.replace(self.fault, hint=""))
        self.assertNotIn("→", output)

    def testHostProgramName(self) -> None:
        with mock.patch.object(sys.modules["__main__"], "__prog__", "naval_fate", create=True):
            self.assertIn("[ naval_fate — 21101", render(self.fault))


class SurfacingTest(TestCase):
    """Faults are raised to the caller, never reported by the package itself."""

    def testMatcherRaisesToCaller(self) -> None:
        with self.assertRaises(PatternArityError) as context:
            match(OneOrMore(Argument("a"), Argument("b")), [])
        output = render(context.exception)
        self.assertIn("Malformed Pattern", output)
        self.assertIn("expects exactly one child, got 2", output)

    def testNoReportingHooks(self) -> None:
        self.assertFalse(hasattr(faults, "trigger"))
        self.assertFalse(hasattr(faults, "console"))
        self.assertFalse(hasattr(MatchException, "__trigger__"))

    def testMessageIsRequired(self) -> None:
        with self.assertRaises(TypeError):
            UsageMismatchError()


if __name__ == '__main__':
    unittest.main()
