r"""
Flag model: spellings, value requirements, and the two resolvers.

Spelling grammar (as declared by applications)
- short:  "-b", "-p DIR" (value required), "-p[DIR]" (value optional)
- long:   "--binary", "--name=NAME" (value required), "--tmpdir[=DIR]" (value optional)
  A long name may itself start with '-': "---presume-input-pipe".

Resolution
- FlagSet.resolve_long(name): exact match, else unique non-empty prefix,
  else UnrecognizedOptionError / AmbiguousOptionError. Help and version
  spellings take part in the same abbreviation pool.
- FlagSet.resolve_short(char): exact character lookup.

Both return either a Builtin sentinel (Help/Version) or the Entry holding
the Flag that matched and the object it was declared for.
"""
import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple

from .events import Builtin
from .faults import AmbiguousOptionError, UnrecognizedOptionError
from .utils import infer

logger = logging.getLogger(__name__)

_SHORT = re.compile(r"-(?P<name>[^\s=\[\]-])(?:\[(?P<optional>[^\]\s]+)\]| (?P<required>\S+))?")
_LONG = re.compile(r"--(?P<name>[^\s=\[\]]+)(?:\[=(?P<optional>[^\]\s]+)\]|=(?P<required>\S+))?")


class Requirement(Enum):
    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"


class Flag(NamedTuple):
    """
    One spelling of an option.
    """
    name: str
    short: bool
    value: Requirement = Requirement.NONE
    metavar: str | None = None

    @classmethod
    def parse(cls, spelling, /):
        """
        Build a Flag from a declared spelling such as "-p DIR" or "--tmpdir[=DIR]".
        """
        if not isinstance(spelling, str):
            raise TypeError("flag spelling must be a string")
        for pattern, short in ((_LONG, False), (_SHORT, True)):
            if match := pattern.fullmatch(spelling):
                break
        else:
            raise ValueError(f"invalid flag spelling {spelling!r}")
        if match["optional"]:
            return cls(match["name"], short, Requirement.OPTIONAL, match["optional"])
        if match["required"]:
            return cls(match["name"], short, Requirement.REQUIRED, match["required"])
        return cls(match["name"], short)

    @property
    def takes_value(self):
        return self.value is not Requirement.NONE

    def __str__(self):
        return ("-" if self.short else "--") + self.name


class Entry(NamedTuple):
    flag: Flag
    target: Any


class FlagSet:
    """
    Immutable lookup tables over every flag of one argument model.

    Parameters
    - entries: iterable of (Flag, target) in declaration order.
    - help / version: iterables of Flag spellings that resolve to the built-in
      sentinels instead of a target.

    Spellings must be unique within each namespace; a duplicate is a model
    error and raises ValueError here, so the resolvers never re-check.
    """

    def __init__(self, entries=(), *, help=(), version=()):
        longs = {}
        shorts = {}

        def claim(flag, object):
            table = shorts if flag.short else longs
            if flag.name in table:
                raise ValueError(f"flag {str(flag)!r} is already in use")
            table[flag.name] = object

        # built-in spellings come first so they lead the candidate pool
        for kind, flags in ((Builtin.HELP, help), (Builtin.VERSION, version)):
            for flag in flags:
                if flag.takes_value:
                    raise ValueError(f"built-in flag {str(flag)!r} cannot take a value")
                claim(flag, kind)

        for flag, target in entries:
            claim(flag, Entry(flag, target))

        self._longs = MappingProxyType(longs)
        self._shorts = MappingProxyType(shorts)
        logger.debug("flag set built with %d long and %d short spellings", len(longs), len(shorts))

    @property
    def longs(self):
        return self._longs

    @property
    def shorts(self):
        return self._shorts

    def resolve_long(self, name, /):
        """
        Resolve a long option name typed without its leading "--".

        Returns
        - Builtin.HELP / Builtin.VERSION for built-in spellings.
        - Entry for application options.

        Raises
        - UnrecognizedOptionError: no spelling equals or starts with 'name'.
        - AmbiguousOptionError: no exact match and several spellings start with 'name'.
        """
        match infer(name, self._longs.keys()):
            case ():
                raise UnrecognizedOptionError("--" + name)
            case (spelling,):
                return self._longs[spelling]
            case candidates:
                raise AmbiguousOptionError(name, candidates)

    def resolve_short(self, char, /):
        """
        Resolve one short option character.

        The returned Entry's flag tells whether the rest of the cluster is the
        value of this option.
        """
        try:
            return self._shorts[char]
        except KeyError:
            raise UnrecognizedOptionError("-" + char) from None

    def __repr__(self):
        return "flag-set(longs=%r, shorts=%r)" % (tuple(self._longs), tuple(self._shorts))


__all__ = (
    "Requirement",
    "Flag",
    "Entry",
    "FlagSet",
)
