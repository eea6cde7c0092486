"""
Value conversion capability.

A converter is any callable taking (option, value) and returning the typed
value, where 'option' is the spelling the user typed ("--lines", "-n") or the
positional metavar, and 'value' is the raw token (str, possibly carrying
surrogate escapes for bytes that were not valid UTF-8).

Converters report bad input by raising an ArgumentError subclass; a plain
ValueError or TypeError is also accepted and wrapped into ParsingFailedError
by the parser.

Built-ins
- raw: the token unchanged.
- text: the token, rejecting values that are not valid UTF-8.
- path: pathlib.Path (any bytes allowed, like an OS path).
- integer / natural / bounded(lo, hi): decimal integers.
- converter(func): adapt a one-argument callable such as float.
- Choice: enumerated keywords with abbreviation ("--format=lo" → long).
"""
import builtins
import enum
import pathlib
import re
from types import MappingProxyType

from .faults import AmbiguousValueError, ArgumentError, NonUnicodeValueError, ParsingFailedError
from .utils import infer, rename

_INTEGER = re.compile(r"[+-]?[0-9]+")


def raw(option, value, /):
    return value


def text(option, value, /):
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise NonUnicodeValueError(value) from None
    return value


def path(option, value, /):
    return pathlib.Path(value)


def integer(option, value, /):
    """
    Parse a decimal integer with an optional sign; no spaces or underscores.
    """
    value = text(option, value)
    if not _INTEGER.fullmatch(value):
        raise ParsingFailedError(option, value, ValueError("invalid digit found in string"))
    return int(value)


def bounded(minimum=None, maximum=None, /):
    """
    Build an integer converter rejecting values outside [minimum, maximum].
    """
    @rename("bounded")
    def convert(option, value, /):
        number = integer(option, value)
        if minimum is not None and number < minimum:
            raise ParsingFailedError(option, value, ValueError("number too small to fit in target type"))
        if maximum is not None and number > maximum:
            raise ParsingFailedError(option, value, ValueError("number too large to fit in target type"))
        return number
    return convert


natural = rename(bounded(0), "natural")


def converter(function, /):
    """
    Adapt a one-argument callable (float, ipaddress.ip_address, ...) into a converter.

    The raw value is checked to be valid UTF-8 first; ValueError and TypeError
    raised by 'function' become ParsingFailedError.
    """
    if not callable(function):
        raise TypeError("converter() argument must be callable")

    def convert(option, value, /):
        value = text(option, value)
        try:
            return function(value)
        except ArgumentError:
            raise
        except (ValueError, TypeError) as exception:
            raise ParsingFailedError(option, value, exception) from exception
    return rename(convert, getattr(function, "__name__", "converter"))


class Choice:
    """
    Converter over a fixed set of keywords.

    Keys are what users type; values are what the application receives.
    A value may be reached through several keys ("yes", "always", "force").
    Abbreviations follow the long-option rules: exact match wins, a unique
    prefix wins, several candidates raise AmbiguousValueError.
    """

    def __init__(self, mapping, /):
        mapping = dict(mapping)
        if not mapping:
            raise ValueError("choice must have at least one key")
        for key in mapping:
            if not isinstance(key, str) or not key:
                raise TypeError("choice keys must be non-empty strings")
        self._mapping = MappingProxyType(mapping)

    @classmethod
    def of(cls, type, /, **aliases):
        """
        Build a Choice from an Enum: each member is keyed by its lowercased
        name with '_' turned into '-' (SINGLE_COLUMN → "single-column").

        'aliases' maps a member name to extra keys, which replace the default key:
            Choice.of(When, ALWAYS=("yes", "always", "force"))
        """
        if not (isinstance(type, builtins.type) and issubclass(type, enum.Enum)):
            raise TypeError("Choice.of() argument must be an enum type")
        mapping = {}
        for member in type:
            for key in aliases.get(member.name, (member.name.lower().replace("_", "-"),)):
                mapping[key] = member
        return cls(mapping)

    @property
    def keys(self):
        return tuple(self._mapping)

    def __call__(self, option, value, /):
        value = text(option, value)
        match infer(value, self._mapping.keys()):
            case ():
                raise ParsingFailedError(option, value, ValueError(
                    "valid arguments are: %s" % ", ".join(map(repr, self._mapping))
                ))
            case (key,):
                return self._mapping[key]
            case candidates:
                raise AmbiguousValueError(option, value, candidates)

    def __repr__(self):
        return "choice(%s)" % ", ".join(map(repr, self._mapping))


__all__ = (
    "raw",
    "text",
    "path",
    "integer",
    "natural",
    "bounded",
    "converter",
    "Choice",
)
