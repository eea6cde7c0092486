"""
Parse cursor: turns tokens into resolved Events, one at a time.

The parser holds the lexer, the model's lookup tables, and the number of
positional values consumed so far. It never accumulates results; the caller
applies each Event as it arrives and finally asks for the missing-positional
check.
"""
import logging

from .events import Builtin, Event
from .faults import ArgumentError, ParsingFailedError
from .flags import Requirement
from .lexer import Lexer, Long, Short, Value

logger = logging.getLogger(__name__)


class Parser:
    """
    Pull-based parser over one argument vector.

    Parameters
    - flags: FlagSet of the model.
    - positionals: Positionals of the model.
    - arguments: mapping from declared name to its Option/Positional spec,
      used to find converters and defaults.
    - args: the argument vector, program path first.

    Iterating yields Builtin.HELP / Builtin.VERSION sentinels and Events;
    errors propagate as ArgumentError subclasses.
    """

    def __init__(self, flags, positionals, arguments, args):
        self._flags = flags
        self._positionals = positionals
        self._arguments = arguments
        self._lexer = Lexer(args)
        self._index = 0

    @property
    def bin_name(self):
        return self._lexer.bin_name

    @property
    def index(self):
        """
        Number of positional values consumed so far.
        """
        return self._index

    def __iter__(self):
        return self

    def __next__(self):
        if (argument := self.next_arg()) is None:
            raise StopIteration
        return argument

    def next_arg(self):
        """
        Resolve the next token; None once the input is exhausted.
        """
        match self._lexer.next():
            case None:
                return None
            case Short(name):
                argument = self._flags.resolve_short(name)
                if not isinstance(argument, Builtin):
                    argument = self._bind(argument, "-" + name)
            case Long(name):
                argument = self._flags.resolve_long(name)
                if not isinstance(argument, Builtin):
                    argument = self._bind(argument, "--" + argument.flag.name)
            case Value(value):
                argument = self._positional(value)
        logger.debug("%s: resolved %r", self.bin_name, argument)
        return argument

    def check_missing_positionals(self):
        """
        Raise MissingPositionalArgumentsError if a required slot was left empty.
        """
        self._positionals.check_missing(self._index)

    def _bind(self, entry, label):
        flag, option = entry
        match flag.value:
            case Requirement.NONE if option.type is None:
                return Event(option.name)
            case Requirement.NONE:
                return Event(option.name, option.default)
            case Requirement.OPTIONAL:
                if (value := self._lexer.optional_value()) is None:
                    return Event(option.name, option.default)
                return Event(option.name, self._convert(option.type, label, value))
            case Requirement.REQUIRED:
                return Event(option.name, self._convert(option.type, label, self._lexer.value()))

    def _positional(self, value):
        self._index += 1
        slot = self._positionals.route(self._index, value)
        convert = self._arguments[slot.name].type
        if slot.last:
            rest = self._lexer.raw_args()
            self._index += len(rest)
            return Event(slot.name, [self._convert(convert, slot.metavar, value) for value in (value, *rest)])
        return Event(slot.name, self._convert(convert, slot.metavar, value))

    @staticmethod
    def _convert(convert, label, value):
        try:
            return convert(label, value)
        except ArgumentError:
            raise
        except (ValueError, TypeError) as exception:
            raise ParsingFailedError(label, value, exception) from exception


__all__ = (
    "Parser",
)
