"""
Settings frontend.

An Options subclass names the argument model it reads and folds every
resolved Event into itself through apply(). This is the layer that turns
faults into process exits; everything below it only raises.

    class Settings(Options, arguments=Arg, exit_code=2):
        def __init__(self):
            self.binary = False
            self.files = []

        def apply(self, event):
            match event:
                case Event("binary"):
                    self.binary = True
                case Event("file", path):
                    self.files.append(path)

    settings = Settings().parse()
"""
import logging
import sys

from .arguments import Arguments
from .events import Builtin
from .faults import ArgumentError, HelpRequested, Interrupt, VersionRequested, trigger
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class Options:
    """
    Base class of settings objects.

    Class options
    - arguments: the Arguments model to parse with (required on concrete classes).
    - exit_code: process exit status for parse errors (default: 1).
    - colorful / fancy: rich rendering switches for error reports.
    """
    __arguments__ = None
    __exit_code__ = 1
    __colorful__ = True
    __fancy__ = False

    def __init_subclass__(cls, /, arguments=Unset, exit_code=Unset, colorful=Unset, fancy=Unset, **options):
        super().__init_subclass__(**options)
        if arguments is not Unset:
            if not (isinstance(arguments, type) and issubclass(arguments, Arguments)):
                raise TypeError(f"{cls.__name__} 'arguments' must be an Arguments subclass")
            cls.__arguments__ = arguments
        if exit_code is not Unset:
            if not isinstance(exit_code, int) or isinstance(exit_code, bool):
                raise TypeError(f"{cls.__name__} 'exit_code' must be an integer")
            cls.__exit_code__ = exit_code
        cls.__colorful__ = bool(coalesce(colorful, cls.__colorful__))
        cls.__fancy__ = bool(coalesce(fancy, cls.__fancy__))

    def apply(self, event):
        """
        Fold one Event into the settings. Subclasses must override.
        """
        raise NotImplementedError(f"{type(self).__name__} must implement apply()")

    def try_parse(self, args, /):
        """
        Parse 'args' (program path first) into self and return self.

        Raises ArgumentError on invalid input, HelpRequested / VersionRequested
        when a built-in flag is seen.
        """
        return self._drive(self._model().parse(args))

    def parse(self, args=Unset, /):
        """
        Parse 'args' (default: sys.argv), printing help/version or the error
        report and exiting the process instead of raising.
        """
        parser = self._model().parse(coalesce(args, sys.argv))
        try:
            return self._drive(parser)
        except (ArgumentError, Interrupt) as fault:
            trigger(
                fault,
                shell=True,
                colorful=type(self).__colorful__,
                fancy=type(self).__fancy__,
                bin_name=parser.bin_name,
                exit_code=type(self).__exit_code__,
            )

    def _model(self):
        if (model := type(self).__arguments__) is None:
            raise TypeError(f"{type(self).__name__} does not declare its 'arguments'")
        return model

    def _drive(self, parser):
        model = self._model()
        for argument in parser:
            match argument:
                case Builtin.HELP:
                    raise HelpRequested(model.help_text(parser.bin_name))
                case Builtin.VERSION:
                    raise VersionRequested(model.version_text(parser.bin_name))
                case _:
                    self.apply(argument)
        parser.check_missing_positionals()
        logger.debug("%s: parsed %d positional value(s)", parser.bin_name, parser.index)
        return self


__all__ = (
    "Options",
)
