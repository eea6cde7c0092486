"""
Coreargs faults (errors and interrupts) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every way an
  invocation can be rejected. Codes are grouped by domain so logs and
  searches stay predictable.
- ArgumentError: base type for parse failures. Each subclass carries the
  exact fields a frontend needs to explain the failure (option, value,
  candidates, ...) and knows how to render itself with rich.
- Interrupt: HelpRequested / VersionRequested, raised by the settings
  frontend when a built-in help or version flag was seen.
- trigger(): central entry point to surface a fault (raise, or print and exit
  in shell mode).

Policy
- The parsing core only raises. Nothing here is retried; the first fault
  ends the parse.
- Printing and exiting happen only through trigger(..., shell=True), which
  the Options frontend uses.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)
stdout = Console()


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - switches (1111x)
      • UNRECOGNIZED_OPTION, AMBIGUOUS_OPTION, UNEXPECTED_VALUE, MISSING_VALUE
    - positionals (1112x)
      • UNEXPECTED_ARGUMENT, MISSING_POSITIONALS
    - values (1113x)
      • PARSING_FAILED, AMBIGUOUS_VALUE, NON_UNICODE_VALUE, CUSTOM

    normalize() allows host remapping to custom labels while keeping
    code-stability.
    """
    # --- switch errors ---
    UNRECOGNIZED_OPTION  = 11111
    AMBIGUOUS_OPTION     = 11112
    UNEXPECTED_VALUE     = 11113
    MISSING_VALUE        = 11114

    # --- positional errors ---
    UNEXPECTED_ARGUMENT  = 11121
    MISSING_POSITIONALS  = 11122

    # --- value errors ---
    PARSING_FAILED       = 11131
    AMBIGUOUS_VALUE      = 11132
    NON_UNICODE_VALUE    = 11133
    CUSTOM               = 11134

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styles(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class ArgumentError(Exception):
    """
    base class of every parse failure.

    'message' is a short lowercased sentence; 'options' holds the structured
    fields (always including 'code' and 'title') and any rendering context
    merged in later through copy.replace().
    """
    code = FaultCode.CUSTOM
    title = "invalid arguments"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({"code": self.code, "title": self.title} | options)

    def __getattr__(self, name):
        # structured fields (option, value, candidates...) read as attributes
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        styles = _styles({
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })
        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(__import__("__main__"), "__prog__", self.options.get("bin_name") or "")

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.options["code"].normalize(), "code"),
            " | ",
            text(self.options["title"].title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        console.print(self)
        sys.exit(self.options.get("exit_code", 1))

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        # subclasses take their fields positionally, so rebuild without calling __init__
        fault = type(self).__new__(type(self), *self.args)
        fault.__dict__.update(self.__dict__)
        fault.options = MappingProxyType({**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class MissingValueError(ArgumentError):
    code = FaultCode.MISSING_VALUE
    title = "missing option value"

    def __init__(self, option=None):
        if option is None:
            message = "a value is required"
        else:
            message = "option %r requires a value" % option
        super().__init__(message, option=option, hint="provide a value (e.g., %s=VALUE)" % (option or "--option"))


class UnrecognizedOptionError(ArgumentError):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"

    def __init__(self, option):
        super().__init__("unrecognized option %r" % option, option=option)


class UnexpectedArgumentError(ArgumentError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"

    def __init__(self, value):
        super().__init__("unexpected argument %r" % value, value=value)


class UnexpectedValueError(ArgumentError):
    code = FaultCode.UNEXPECTED_VALUE
    title = "option takes no value"

    def __init__(self, option, value):
        super().__init__(
            "option %r does not take a value (got %r)" % (option, value),
            option=option,
            value=value,
            hint="remove everything from '=' (for example: %s)" % option,
        )


class ParsingFailedError(ArgumentError):
    code = FaultCode.PARSING_FAILED
    title = "invalid value"

    def __init__(self, option, value, cause):
        if option:
            message = "invalid value %r for %r: %s" % (value, option, cause)
        else:
            message = "invalid value %r: %s" % (value, cause)
        super().__init__(message, option=option, value=value, cause=cause)
        self.__cause__ = cause


class AmbiguousOptionError(ArgumentError):
    code = FaultCode.AMBIGUOUS_OPTION
    title = "ambiguous option"

    def __init__(self, option, candidates):
        candidates = sorted(candidates)
        super().__init__(
            "option '--%s' is ambiguous" % option,
            option=option,
            candidates=candidates,
            hint="possibilities: %s" % " ".join("'--%s'" % candidate for candidate in candidates),
        )


class AmbiguousValueError(ArgumentError):
    code = FaultCode.AMBIGUOUS_VALUE
    title = "ambiguous value"

    def __init__(self, option, value, candidates):
        candidates = sorted(candidates)
        super().__init__(
            "ambiguous value %r for %r" % (value, option),
            option=option,
            value=value,
            candidates=candidates,
            hint="valid arguments are: %s" % ", ".join(map(repr, candidates)),
        )


class MissingPositionalArgumentsError(ArgumentError):
    code = FaultCode.MISSING_POSITIONALS
    title = "missing arguments"

    def __init__(self, names):
        names = list(names)
        super().__init__("missing argument(s): %s" % ", ".join(names), names=names)


class NonUnicodeValueError(ArgumentError):
    code = FaultCode.NON_UNICODE_VALUE
    title = "invalid unicode"

    def __init__(self, value):
        super().__init__("value %r is not valid unicode" % value, value=value)


class CustomError(ArgumentError):
    code = FaultCode.CUSTOM
    title = "invalid arguments"

    def __init__(self, cause):
        super().__init__(str(cause), cause=cause)
        self.__cause__ = cause


class Interrupt(Exception):
    """
    a built-in flag asked the program to print 'text' and stop successfully.
    """

    def __init__(self, text, /, **options):
        super().__init__(text)
        self.text = text
        self.options = MappingProxyType(options)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        stdout.print(self.text, markup=False, highlight=False)
        sys.exit(0)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.text, **{**self.options, **overrides})


class HelpRequested(Interrupt): ...
class VersionRequested(Interrupt): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, errors are rendered to stderr and the process exits with
      'exit_code'; interrupts print to stdout and exit 0. otherwise the fault
      is raised.

    typical options
    - shell, fancy, colorful, bin_name, exit_code.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentError",
    "MissingValueError",
    "UnrecognizedOptionError",
    "UnexpectedArgumentError",
    "UnexpectedValueError",
    "ParsingFailedError",
    "AmbiguousOptionError",
    "AmbiguousValueError",
    "MissingPositionalArgumentsError",
    "NonUnicodeValueError",
    "CustomError",
    "Interrupt",
    "HelpRequested",
    "VersionRequested",
    "trigger",
)
