"""
Lexer behavioral tests (token classification and value hand-off).

Scope
- Validate short clusters, long options with attached values, "--" and "-".
- Validate value(), optional_value() and raw_args() against the token stream.
- Validate faults raised for unconsumed attached values and missing values.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from coreargs.faults import MissingValueError, UnexpectedValueError
from coreargs.lexer import Lexer, Long, Short, Value


def drain(lexer):
    tokens = []
    while (token := lexer.next()) is not None:
        tokens.append(token)
    return tokens


class TestLexerTokens(TestCase):
    """Classification of raw tokens."""

    def testBinNameIsBasename(self):
        self.assertEqual(Lexer(["/usr/bin/tail"]).bin_name, "tail")

    def testEmptyArgsHaveNoBinName(self):
        lexer = Lexer([])
        self.assertIsNone(lexer.bin_name)
        self.assertIsNone(lexer.next())

    def testShortClusterSplits(self):
        self.assertEqual(drain(Lexer(["prog", "-abc"])), [Short("a"), Short("b"), Short("c")])

    def testLongOption(self):
        self.assertEqual(drain(Lexer(["prog", "--binary"])), [Long("binary")])

    def testSingleDashIsValue(self):
        self.assertEqual(drain(Lexer(["prog", "-"])), [Value("-")])

    def testDoubleDashEndsOptions(self):
        self.assertEqual(
            drain(Lexer(["prog", "-a", "--", "-b", "--c", "--"])),
            [Short("a"), Value("-b"), Value("--c"), Value("--")],
        )

    def testTripleDashLongName(self):
        self.assertEqual(drain(Lexer(["prog", "---presume-input-pipe"])), [Long("-presume-input-pipe")])

    def testBytesAreDecodedWithSurrogates(self):
        lexer = Lexer([b"prog", b"\xff"])
        self.assertEqual(lexer.next(), Value("\udcff"))

    def testLastOptionSpelling(self):
        lexer = Lexer(["prog", "-x", "--name"])
        lexer.next()
        self.assertEqual(lexer.last_option, "-x")
        lexer.next()
        self.assertEqual(lexer.last_option, "--name")


class TestLexerValues(TestCase):
    """Hand-off of option values."""

    def testAttachedLongValue(self):
        lexer = Lexer(["prog", "--name=value"])
        self.assertEqual(lexer.next(), Long("name"))
        self.assertEqual(lexer.value(), "value")
        self.assertIsNone(lexer.next())

    def testAttachedEmptyLongValue(self):
        lexer = Lexer(["prog", "--name="])
        lexer.next()
        self.assertEqual(lexer.optional_value(), "")

    def testUnconsumedLongValueRaises(self):
        lexer = Lexer(["prog", "--binary=x"])
        self.assertEqual(lexer.next(), Long("binary"))
        with self.assertRaises(UnexpectedValueError) as context:
            lexer.next()
        self.assertEqual(context.exception.option, "--binary")
        self.assertEqual(context.exception.value, "x")

    def testShortEqualsWithoutValueRequestRaises(self):
        lexer = Lexer(["prog", "-b=x"])
        self.assertEqual(lexer.next(), Short("b"))
        with self.assertRaises(UnexpectedValueError) as context:
            lexer.next()
        self.assertEqual(context.exception.option, "-b")
        self.assertEqual(context.exception.value, "x")

    def testClusterRemainderAsValue(self):
        lexer = Lexer(["prog", "-pfoo"])
        self.assertEqual(lexer.next(), Short("p"))
        self.assertEqual(lexer.value(), "foo")
        self.assertIsNone(lexer.next())

    def testClusterEqualsIsStripped(self):
        lexer = Lexer(["prog", "-p=foo"])
        lexer.next()
        self.assertEqual(lexer.optional_value(), "foo")

    def testOptionalValueNeverTakesNextToken(self):
        lexer = Lexer(["prog", "-p", "foo"])
        lexer.next()
        self.assertIsNone(lexer.optional_value())
        self.assertEqual(lexer.next(), Value("foo"))

    def testRequiredValueTakesFlagLikeToken(self):
        lexer = Lexer(["prog", "-p", "-x"])
        lexer.next()
        self.assertEqual(lexer.value(), "-x")
        self.assertIsNone(lexer.next())

    def testMissingValueNamesOption(self):
        lexer = Lexer(["prog", "--name"])
        lexer.next()
        with self.assertRaises(MissingValueError) as context:
            lexer.value()
        self.assertEqual(context.exception.option, "--name")

    def testRawArgsDrainsEverything(self):
        lexer = Lexer(["prog", "a", "-b", "--c", "--"])
        self.assertEqual(lexer.next(), Value("a"))
        self.assertEqual(lexer.raw_args(), ["-b", "--c", "--"])
        self.assertIsNone(lexer.next())


if __name__ == "__main__":
    unittest.main()
