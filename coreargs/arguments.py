r"""
Coreargs argument models.

Overview
- Specs
  • Option: a named switch with one or more spellings (-b/--binary), which may
    carry a typed value (--lines=NUM) and a declared default.
  • Positional: a named slot for bare values with an accepted occurrence range,
    optionally the terminal slot that captures the rest of the command line.

- Models
  • Arguments: subclasses declare Option/Positional attributes. The metaclass
    collects them in declaration order and builds the immutable FlagSet and
    Positionals tables once, at class creation.

Example
    class Arg(Arguments, help=("-h", "--help")):
        binary = Option("-b", "--binary")
        lines = Option("-n NUM", "--lines=NUM", type=natural, default=10)
        tmpdir = Option("-p DIR", "--tmpdir[=DIR]", type=path, default=Path("/tmp"))
        file = Positional("FILE", type=path, nargs="*")

    parser = Arg.parse(["tail", "-n", "5", "log.txt"])
    for event in parser:
        ...
    parser.check_missing_positionals()

Validation highlights (raised at declaration time, never while parsing)
- Spellings must match the flag grammar of coreargs.flags and be unique.
- A value-taking spelling ("-p DIR", "--x[=Y]") requires a 'type'.
- An option whose value can be omitted ("--x[=Y]", or a bare "-F" on an
  option that has a 'type') requires a 'default'.
- Positional ranges: only the last positional may be unbounded, and only the
  last may capture the rest.
"""
import functools
import inspect
import logging
import operator
import re
import string
from types import EllipsisType, MappingProxyType

from .flags import Flag, FlagSet, Requirement
from .parser import Parser
from .positionals import PositionalSlot, Positionals
from .utils import *
from .values import text

logger = logging.getLogger(__name__)


class ArgumentType(type):
    """
    Metaclass giving specs stable representations and read-only fields.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the fields shared by Option and Positional.

    - help: Unset | str, non-empty after trimming; becomes None when Unset.
    - type: None (options only) or a callable converter taking (option, value).
    """
    if not isinstance(help := metadata["help"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    elif isinstance(help, str) and not (help := help.strip()):
        raise ValueError(f"{cls.__typename__} 'help' cannot be empty")
    metadata["help"] = coalesce(help)

    if metadata["type"] is not None and not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")


def _sanitize_option_metadata(cls, metadata, /):
    """
    Internal: parse spellings and check that they agree with 'type' and 'default'.

    The (value-taking spelling, no type) combination and the (omittable value,
    no default) combination are rejected here, so the parser never has to
    handle them.
    """
    if not metadata["spellings"]:
        raise TypeError(f"{cls.__typename__} must specify at least one spelling")

    flags = []
    for spelling in metadata["spellings"]:
        try:
            flag = Flag.parse(spelling)
        except ValueError:
            raise ValueError(f"{cls.__typename__} spelling {spelling!r} is not a valid flag") from None
        except TypeError:
            raise TypeError(f"{cls.__typename__} spellings must be strings") from None
        if any((flag.short, flag.name) == (other.short, other.name) for other in flags):
            raise ValueError(f"{cls.__typename__} spellings cannot contain duplicates")
        flags.append(flag)
    metadata["flags"] = tuple(flags)
    del metadata["spellings"]

    if metadata["type"] is None:
        if any(flag.takes_value for flag in flags):
            raise TypeError(f"{cls.__typename__} {str(flags[0])!r} takes a value, it must specify a 'type'")
        if metadata["default"] is not Unset:
            raise TypeError(f"{cls.__typename__} {str(flags[0])!r} has no 'type', it cannot have a 'default'")
    elif metadata["default"] is Unset and any(flag.value is not Requirement.REQUIRED for flag in flags):
        raise TypeError(f"{cls.__typename__} {str(flags[0])!r} may be given without a value, it must specify a 'default'")


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: normalize 'nargs' into an inclusive (minimum, maximum) range.

    Accepted forms
    - int n (>= 1)     → [n, n]
    - "?"              → [0, 1]
    - "*"              → [0, unbounded]
    - "+"              → [1, unbounded]
    - range(a, b)      → [a, b - 1] (step 1)
    - (a, b)           → [a, b], b may be None for unbounded
    - ... (Ellipsis)   → [0, unbounded] and captures the rest ('last' implied)
    """
    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = metavar

    if metadata["type"] is None:
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    match nargs := metadata.pop("nargs"):
        case bool():
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string, an integer, a range, or ellipsis")
        case int() if nargs >= 1:
            minimum, maximum = nargs, nargs
        case int():
            raise ValueError(f"{cls.__typename__} 'nargs' must be a positive integer")
        case "?":
            minimum, maximum = 0, 1
        case "*":
            minimum, maximum = 0, None
        case "+":
            minimum, maximum = 1, None
        case str():
            raise ValueError(f"{cls.__typename__} 'nargs' must be one of '?', '+', or '*'")
        case range() if nargs.step == 1 and 0 <= nargs.start < nargs.stop:
            minimum, maximum = nargs.start, nargs.stop - 1
        case range():
            raise ValueError(f"{cls.__typename__} 'nargs' range must be non-empty, non-negative, with step 1")
        case (int() as minimum, int() | None as maximum) if isinstance(nargs, tuple):
            if minimum < 0 or (maximum is not None and maximum < minimum):
                raise ValueError(f"{cls.__typename__} 'nargs' bounds are out of order")
        case EllipsisType():
            minimum, maximum = 0, None
            metadata["last"] = True
        case _:
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string, an integer, a range, or ellipsis")

    metadata["minimum"] = minimum
    metadata["maximum"] = maximum


class Option(metaclass=ArgumentType):
    """
    Named switch specification.

    Parameters
    - spellings: one or more of "-x", "-x VAL", "-x[VAL]", "--name",
      "--name=VAL", "--name[=VAL]". The value requirement belongs to each
      spelling, so "-F" and "--classify[=WHEN]" may share one option.
    - type: converter for the value, or None when the option carries none.
    - default: value bound when the value is omitted (optional spellings, or
      no-value spellings of a typed option).
    - hidden: suppressed from help listings.
    - help: short description.
    """

    __introspectable__ = (
        "name",
        "flags",
        "type",
        "default",
        "hidden",
        "help",
    )

    def __new__(cls, *spellings, type=None, default=Unset, hidden=False, help=Unset):
        metadata = {
            "spellings": spellings,
            "type": type,
            "default": default,
            "hidden": bool(hidden),
            "help": help,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_option_metadata(cls, metadata)

        self = super().__new__(cls)
        self._name = Unset
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __set_name__(self, owner, name):
        if self._name is not Unset and self._name != name:
            raise TypeError(f"{type(self).__typename__} is already bound to {self._name!r}")
        self._name = name

    @property
    def takes_value(self):
        return self._type is not None


class Positional(metaclass=ArgumentType):
    """
    Positional slot specification.

    Parameters
    - metavar: label used in diagnostics; defaults to the upper-cased
      attribute name.
    - type: converter applied to each value (default: text).
    - nargs: accepted occurrence range (see _sanitize_positional_metadata).
    - last: capture every remaining token, flag-like or not, as one list.
    - hidden / help: documentation metadata.
    """

    __introspectable__ = (
        "name",
        "metavar",
        "type",
        "minimum",
        "maximum",
        "last",
        "hidden",
        "help",
    )

    def __new__(cls, metavar=Unset, /, type=text, nargs=1, last=False, hidden=False, help=Unset):
        metadata = {
            "metavar": metavar,
            "type": type,
            "nargs": nargs,
            "last": bool(last),
            "hidden": bool(hidden),
            "help": help,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_positional_metadata(cls, metadata)

        self = super().__new__(cls)
        self._name = Unset
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __set_name__(self, owner, name):
        if self._name is not Unset and self._name != name:
            raise TypeError(f"{type(self).__typename__} is already bound to {self._name!r}")
        self._name = name
        self._metavar = coalesce(self._metavar, name.upper())

    def slot(self):
        return PositionalSlot(self._name, self._metavar, self._minimum, self._maximum, self._last)


class ArgumentsType(type):
    """
    Metaclass that turns a class body of specs into lookup tables.

    Options (class keywords)
    - help: spellings resolving to the Help sentinel (default: ("--help",)).
    - version: spellings resolving to the Version sentinel (default: ()).
    - release: version string reported by version_text().

    Produces
    - __arguments__: mapping[attribute name → Option | Positional]
    - __flagset__: FlagSet over every option spelling plus help/version
    - __positionals__: Positionals over the declared slots, in order
    """

    def __new__(cls, name, bases, namespace, *, help=Unset, version=Unset, release=Unset, **options):
        self = super().__new__(cls, name, bases, namespace, **options)
        self.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower()

        arguments = {}
        for base in reversed(self.__mro__):
            for key, object in vars(base).items():
                if isinstance(object, Option | Positional):
                    arguments.pop(key, None)
                    arguments[key] = object

        self.__arguments__ = MappingProxyType(arguments)
        self.__release__ = coalesce(release, getattr(self, "__release__", None))

        try:
            for option, key, spellings, default in (
                ("help", "__help_flags__", help, ("--help",)),
                ("version", "__version_flags__", version, ()),
            ):
                if isinstance(spellings, str):
                    raise TypeError(f"{self.__typename__} '{option}' must be an iterable of spellings")
                if spellings is not Unset or not hasattr(self, key):
                    setattr(self, key, tuple(map(Flag.parse, coalesce(spellings, default))))
            self.__flagset__ = FlagSet(
                (
                    (flag, object)
                    for object in arguments.values() if isinstance(object, Option)
                    for flag in object.flags
                ),
                help=self.__help_flags__,
                version=self.__version_flags__,
            )
            self.__positionals__ = Positionals(
                object.slot() for object in arguments.values() if isinstance(object, Positional)
            )
        except ValueError as exception:
            raise ValueError(f"{self.__typename__} {exception}") from None

        logger.debug("%s declares %r and %r", self.__typename__, self.__flagset__, self.__positionals__)
        return self


class Arguments(metaclass=ArgumentsType):
    """
    Base class of argument models; never instantiated.
    """

    def __new__(cls, *unused, **unused_options):
        raise TypeError(f"{cls.__typename__} is a model, use {cls.__name__}.parse() instead")

    @classmethod
    def parse(cls, args, /):
        """
        Start a parse over 'args' (program path first) and return the Parser.
        """
        return Parser(cls.__flagset__, cls.__positionals__, cls.__arguments__, args)

    @classmethod
    def help_text(cls, bin_name, /):
        """
        The model's docstring with $bin_name substituted.
        """
        return string.Template(inspect.cleandoc(cls.__dict__.get("__doc__") or "")).safe_substitute(bin_name=bin_name or "")

    @classmethod
    def version_text(cls, bin_name, /):
        return " ".join(filter(None, (bin_name, cls.__release__)))


__all__ = (
    "Option",
    "Positional",
    "Arguments",
)
