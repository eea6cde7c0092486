"""
Token stream for POSIX/GNU-style argument vectors.

The lexer only classifies; it never knows which options exist. Callers pull
one token at a time with next() and, when the option they resolved expects a
value, ask for it with value() or optional_value().

Rules
- "--" ends option processing; every later token is a Value.
- "-" alone is a Value.
- "--name" is a Long token; "--name=value" also attaches "value", which must
  be consumed before the next call to next() or it becomes an
  UnexpectedValueError.
- "-abc" is a cluster of Short tokens. What follows a short option inside its
  cluster is a value only if the caller asks for one ("-pfoo", "-p=foo").
- bytes arguments are decoded with os.fsdecode, so bytes that are not valid
  UTF-8 survive as surrogate escapes and can be rejected by text converters.
"""
import logging
import os
from collections import deque
from typing import NamedTuple

from .faults import MissingValueError, UnexpectedValueError

logger = logging.getLogger(__name__)


class Short(NamedTuple):
    name: str


class Long(NamedTuple):
    name: str


class Value(NamedTuple):
    value: str


class Lexer:
    """
    Pull-based tokenizer over an argument vector.

    The first item of 'args' is the program path; bin_name is its basename.
    """

    def __init__(self, args):
        tokens = deque(map(os.fsdecode, args))
        self._bin_name = os.path.basename(tokens.popleft()) if tokens else None
        self._tokens = tokens
        # remainder of a short cluster and the position of the next character
        self._cluster = None
        self._position = 0
        # attached "--name=value" tail that has not been consumed yet
        self._pending = None
        self._finished = False
        self._last = None

    @property
    def bin_name(self):
        return self._bin_name

    @property
    def last_option(self):
        """
        The last option read, spelled the way a user would type it ("-x", "--name").
        """
        match self._last:
            case Short(name):
                return "-" + name
            case Long(name):
                return "--" + name
        return None

    def next(self):
        """
        Return the next Short, Long or Value token, or None when the stream is exhausted.
        """
        if self._pending is not None:
            value, self._pending = self._pending, None
            raise UnexpectedValueError(self.last_option, value)

        if self._cluster is not None:
            if self._position >= len(self._cluster):
                self._cluster = None
            elif self._cluster[self._position] == "=" and self._position > 1:
                # "-x=..." where -x did not ask for its value
                raise UnexpectedValueError(self.last_option, self.optional_value())
            else:
                self._last = Short(self._cluster[self._position])
                self._position += 1
                return self._last

        if not self._tokens:
            return None
        token = self._tokens.popleft()

        if self._finished:
            return Value(token)
        if token == "--":
            self._finished = True
            return self.next()
        if token.startswith("--"):
            name, equals, value = token[2:].partition("=")
            if equals:
                self._pending = value
            self._last = Long(name)
            logger.debug("long option %r", token)
            return self._last
        if token.startswith("-") and token != "-":
            self._cluster, self._position = token, 1
            return self.next()
        return Value(token)

    def optional_value(self):
        """
        Return the value attached to the last option, or None.

        Attached means "--name=value", "-xvalue" or "-x=value" (one leading
        '=' is stripped for short options). A separate following token is
        never taken.
        """
        if self._pending is not None:
            value, self._pending = self._pending, None
            return value
        if self._cluster is not None:
            cluster, position = self._cluster, self._position
            self._cluster = None
            if position >= len(cluster):
                return None
            if cluster[position] == "=":
                position += 1
            return cluster[position:]
        return None

    def value(self):
        """
        Return the value of the last option: attached, else the next token verbatim.

        The next token is taken even if it looks like an option ("-p -x"
        binds "-x" to -p), matching getopt.
        """
        if (value := self.optional_value()) is not None:
            return value
        if self._tokens:
            return self._tokens.popleft()
        raise MissingValueError(self.last_option)

    def raw_args(self):
        """
        Drain and return every remaining token verbatim, options included.
        """
        if (value := self.optional_value()) is not None:
            raise UnexpectedValueError(self.last_option, value)
        tokens = list(self._tokens)
        self._tokens.clear()
        return tokens


__all__ = (
    "Short",
    "Long",
    "Value",
    "Lexer",
)
