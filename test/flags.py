"""
Flag model behavioral tests (spelling grammar and the two resolvers).

Scope
- Validate Flag.parse across short/long and none/optional/required forms.
- Validate long resolution: exact match wins, unique prefix, ambiguity, unknown.
- Validate short lookup and the built-in help/version sentinels.
- Validate FlagSet construction rejects duplicate and value-taking built-ins.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import itertools
import unittest
from unittest import TestCase

from coreargs.events import Builtin
from coreargs.faults import AmbiguousOptionError, UnrecognizedOptionError
from coreargs.flags import Flag, FlagSet, Requirement


def flagset(*spellings, help=("--help",), version=()):
    return FlagSet(
        ((Flag.parse(spelling), spelling) for spelling in spellings),
        help=tuple(map(Flag.parse, help)),
        version=tuple(map(Flag.parse, version)),
    )


class TestFlagParse(TestCase):
    """Declared spellings."""

    def testShortSwitch(self):
        self.assertEqual(Flag.parse("-b"), Flag("b", True))

    def testShortRequired(self):
        self.assertEqual(Flag.parse("-p DIR"), Flag("p", True, Requirement.REQUIRED, "DIR"))

    def testShortOptional(self):
        self.assertEqual(Flag.parse("-p[DIR]"), Flag("p", True, Requirement.OPTIONAL, "DIR"))

    def testLongSwitch(self):
        self.assertEqual(Flag.parse("--binary"), Flag("binary", False))

    def testLongRequired(self):
        self.assertEqual(Flag.parse("--name=NAME"), Flag("name", False, Requirement.REQUIRED, "NAME"))

    def testLongOptional(self):
        self.assertEqual(Flag.parse("--tmpdir[=DIR]"), Flag("tmpdir", False, Requirement.OPTIONAL, "DIR"))

    def testLongNameMayStartWithDash(self):
        self.assertEqual(Flag.parse("---presume-input-pipe").name, "-presume-input-pipe")

    def testTakesValue(self):
        self.assertFalse(Flag.parse("--binary").takes_value)
        self.assertTrue(Flag.parse("--tmpdir[=DIR]").takes_value)

    def testStrIsTypedSpelling(self):
        self.assertEqual(str(Flag.parse("-p DIR")), "-p")
        self.assertEqual(str(Flag.parse("--name=NAME")), "--name")

    def testInvalidSpellingsRejected(self):
        for spelling in ("binary", "-", "--", "-ab", "--a b", "-p  DIR", "--x[=]"):
            with self.subTest(spelling=spelling), self.assertRaises(ValueError):
                Flag.parse(spelling)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            Flag.parse(1)


class TestResolveLong(TestCase):
    """Long option resolution with abbreviation."""

    def testExactMatch(self):
        entry = flagset("--follow", "--force").resolve_long("force")
        self.assertEqual(entry.target, "--force")

    def testUniquePrefix(self):
        entry = flagset("--follow", "--force").resolve_long("fol")
        self.assertEqual(entry.target, "--follow")
        self.assertEqual(entry.flag, Flag("follow", False))

    def testAmbiguousPrefix(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            flagset("--follow", "--force").resolve_long("fo")
        self.assertEqual(context.exception.option, "fo")
        self.assertEqual(context.exception.candidates, ["follow", "force"])

    def testAmbiguousCandidatesAreSorted(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            flagset("--zero", "--zap", "--zebra").resolve_long("z")
        self.assertEqual(context.exception.candidates, ["zap", "zebra", "zero"])

    def testExactMatchBeatsLongerSpellings(self):
        entry = flagset("--force-all", "--force", "--forced").resolve_long("force")
        self.assertEqual(entry.target, "--force")

    def testUnknownRaises(self):
        with self.assertRaises(UnrecognizedOptionError) as context:
            flagset("--follow").resolve_long("x")
        self.assertEqual(context.exception.option, "--x")

    def testHelpJoinsPool(self):
        self.assertIs(flagset("--binary").resolve_long("he"), Builtin.HELP)

    def testHelpCanBeAmbiguous(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            flagset("--hello").resolve_long("he")
        self.assertEqual(set(context.exception.candidates), {"hello", "help"})

    def testVersionSentinel(self):
        self.assertIs(flagset(version=("--version",)).resolve_long("version"), Builtin.VERSION)

    def testValueSpellingsResolveByName(self):
        entry = flagset("--tmpdir[=DIR]").resolve_long("tmp")
        self.assertEqual(entry.flag.value, Requirement.OPTIONAL)

    def testUniquePrefixIgnoresDeclarationOrder(self):
        for order in itertools.permutations(("--follow", "--force", "--lines", "--retry")):
            with self.subTest(order=order):
                flags = flagset(*order)
                self.assertEqual(flags.resolve_long("fol").target, "--follow")
                self.assertEqual(flags.resolve_long("r").target, "--retry")
                with self.assertRaises(AmbiguousOptionError) as context:
                    flags.resolve_long("fo")
                self.assertEqual(context.exception.candidates, ["follow", "force"])


class TestResolveShort(TestCase):
    """Short option lookup."""

    def testKnownShort(self):
        entry = flagset("-b", "-p DIR").resolve_short("p")
        self.assertEqual(entry.flag.value, Requirement.REQUIRED)

    def testUnknownShort(self):
        with self.assertRaises(UnrecognizedOptionError) as context:
            flagset("-b").resolve_short("x")
        self.assertEqual(context.exception.option, "-x")

    def testShortHelp(self):
        self.assertIs(flagset(help=("-h", "--help")).resolve_short("h"), Builtin.HELP)

    def testShortAndLongNamespacesAreDisjoint(self):
        flags = flagset("-b", "--b")
        self.assertEqual(flags.resolve_short("b").target, "-b")
        self.assertEqual(flags.resolve_long("b").target, "--b")


class TestFlagSetConstruction(TestCase):
    """Model errors caught while building the tables."""

    def testDuplicateRejected(self):
        with self.assertRaises(ValueError):
            flagset("--binary", "--binary")

    def testDuplicateWithHelpRejected(self):
        with self.assertRaises(ValueError):
            flagset("--help")

    def testValueTakingBuiltinRejected(self):
        with self.assertRaises(ValueError):
            flagset(help=("--help=TOPIC",))

    def testTablesAreReadOnly(self):
        flags = flagset("--binary")
        with self.assertRaises(TypeError):
            flags.longs["x"] = None


if __name__ == "__main__":
    unittest.main()
