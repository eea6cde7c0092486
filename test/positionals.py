"""
Positional accountant behavioral tests (routing and completeness).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from coreargs.faults import MissingPositionalArgumentsError, UnexpectedArgumentError
from coreargs.positionals import PositionalSlot, Positionals


def slot(name, minimum=1, maximum=1, last=False):
    return PositionalSlot(name.lower(), name, minimum, maximum, last)


class TestRoute(TestCase):
    """Occurrence → slot routing."""

    def testFixedSlotsInOrder(self):
        positionals = Positionals([slot("SOURCE"), slot("DEST")])
        self.assertEqual(positionals.route(1, "a").metavar, "SOURCE")
        self.assertEqual(positionals.route(2, "b").metavar, "DEST")

    def testBeyondEveryBoundRaises(self):
        positionals = Positionals([slot("SOURCE"), slot("DEST")])
        with self.assertRaises(UnexpectedArgumentError) as context:
            positionals.route(3, "c")
        self.assertEqual(context.exception.value, "c")

    def testNoSlotsRejectsFirstValue(self):
        with self.assertRaises(UnexpectedArgumentError):
            Positionals().route(1, "a")

    def testOptionalSlotIsFilledBeforeLaterSlot(self):
        positionals = Positionals([slot("A"), slot("B", 0, 1), slot("C")])
        self.assertEqual([positionals.route(k, "x").metavar for k in (1, 2, 3)], ["A", "B", "C"])

    def testRangeSlot(self):
        positionals = Positionals([slot("NUMBER", 1, 3)])
        self.assertEqual(positionals.route(3, "x").metavar, "NUMBER")
        with self.assertRaises(UnexpectedArgumentError):
            positionals.route(4, "x")

    def testUnboundedSlotTakesEverything(self):
        positionals = Positionals([slot("FILE", 0, None)])
        self.assertEqual(positionals.route(1000, "x").metavar, "FILE")

    def testBounds(self):
        positionals = Positionals([slot("A"), slot("B", 0, 2)])
        self.assertEqual(positionals.bounds, (1, 3))


class TestCheckMissing(TestCase):
    """Completeness check after end of input."""

    def testOptionalSlotNeverMissing(self):
        Positionals([slot("FILE", 0, None)]).check_missing(0)

    def testRequiredUnboundedMissing(self):
        with self.assertRaises(MissingPositionalArgumentsError) as context:
            Positionals([slot("FILE", 1, None)]).check_missing(0)
        self.assertEqual(context.exception.names, ["FILE"])

    def testAllUnmetSlotsListedInOrder(self):
        positionals = Positionals([slot("SOURCE"), slot("DEST")])
        with self.assertRaises(MissingPositionalArgumentsError) as context:
            positionals.check_missing(0)
        self.assertEqual(context.exception.names, ["SOURCE", "DEST"])
        with self.assertRaises(MissingPositionalArgumentsError) as context:
            positionals.check_missing(1)
        self.assertEqual(context.exception.names, ["DEST"])
        positionals.check_missing(2)

    def testThresholdCountsPrecedingMaxima(self):
        # two values fill A and the optional B, so C is still missing
        positionals = Positionals([slot("A"), slot("B", 0, 1), slot("C")])
        with self.assertRaises(MissingPositionalArgumentsError) as context:
            positionals.check_missing(2)
        self.assertEqual(context.exception.names, ["C"])
        positionals.check_missing(3)

    def testPartiallyFilledRange(self):
        positionals = Positionals([slot("PAIR", 2, 2)])
        with self.assertRaises(MissingPositionalArgumentsError):
            positionals.check_missing(1)
        positionals.check_missing(2)


class TestConstruction(TestCase):
    """Model validation."""

    def testUnboundedMustBeLast(self):
        with self.assertRaises(ValueError):
            Positionals([slot("FILE", 0, None), slot("DEST")])

    def testTerminalMustBeLast(self):
        with self.assertRaises(ValueError):
            Positionals([slot("COMMAND", 1, 1, True), slot("DEST")])

    def testInvertedRangeRejected(self):
        with self.assertRaises(ValueError):
            Positionals([slot("A", 2, 1)])

    def testNegativeMinimumRejected(self):
        with self.assertRaises(ValueError):
            Positionals([slot("A", -1, 1)])


if __name__ == "__main__":
    unittest.main()
