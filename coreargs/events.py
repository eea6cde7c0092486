"""
Resolved arguments, the unit the parser hands back to its caller.
"""
from enum import Enum
from typing import Any, NamedTuple

from .utils import Unset


class Builtin(Enum):
    """
    Built-in outcomes that are not declared by the application.
    """
    HELP = "help"
    VERSION = "version"

    def __repr__(self):
        return self.name.title()


Help = Builtin.HELP
Version = Builtin.VERSION


class Event(NamedTuple):
    """
    One bound option or positional.

    'name' is the attribute name the Option/Positional was declared under;
    'value' is the converted value, a list for a terminal positional, or
    Unset for options that carry no value.
    """
    name: str
    value: Any = Unset

    def __repr__(self):
        if self.value is Unset:
            return f"Event({self.name!r})"
        return f"Event({self.name!r}, {self.value!r})"


__all__ = (
    "Builtin",
    "Help",
    "Version",
    "Event",
)
