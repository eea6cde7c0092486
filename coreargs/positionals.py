"""
Positional accounting: which declared slot owns the k-th bare value, and
which required slots were left empty once input ended.

Slots are filled strictly in declaration order. With cumulative upper
bounds B(i) = max(0) + ... + max(i), the 1-based occurrence k belongs to the
first slot with B(i) >= k. The required threshold of a slot with a non-zero
minimum is B(i-1) + min(i): the number of positionals needed before that
slot counts as satisfied.
"""
import bisect
import itertools
import logging
import math
from typing import NamedTuple

from .faults import MissingPositionalArgumentsError, UnexpectedArgumentError

logger = logging.getLogger(__name__)


class PositionalSlot(NamedTuple):
    """
    One positional destination.

    'maximum' is None for an unbounded slot; 'last' marks the terminal slot
    that captures every remaining token verbatim.
    """
    name: str
    metavar: str
    minimum: int = 1
    maximum: int | None = 1
    last: bool = False


class Positionals:
    """
    Immutable routing table over an ordered list of PositionalSlot.

    Construction validates the model (ValueError):
    - minimum <= maximum for every slot, both non-negative;
    - only the final slot may be unbounded;
    - at most one terminal slot, and it must be the final one.
    """

    def __init__(self, slots=()):
        slots = tuple(slots)
        for index, slot in enumerate(slots):
            final = index == len(slots) - 1
            if slot.minimum < 0 or (slot.maximum is not None and slot.maximum < slot.minimum):
                raise ValueError(f"positional {slot.metavar!r} has an invalid range")
            if slot.maximum is None and not final:
                raise ValueError(f"positional {slot.metavar!r} is unbounded, only the last positional may be")
            if slot.last and not final:
                raise ValueError(f"positional {slot.metavar!r} captures the rest, it must be the last positional")

        self._slots = slots
        self._bounds = tuple(itertools.accumulate(
            math.inf if slot.maximum is None else slot.maximum for slot in slots
        ))
        self._thresholds = tuple(
            (slot, previous + slot.minimum)
            for slot, previous in zip(slots, (0, *self._bounds))
            if slot.minimum > 0
        )
        logger.debug("positional bounds %r, thresholds %r", self._bounds, [n for _, n in self._thresholds])

    @property
    def slots(self):
        return self._slots

    @property
    def bounds(self):
        return self._bounds

    def __len__(self):
        return len(self._slots)

    def __getitem__(self, index):
        return self._slots[index]

    def route(self, index, value, /):
        """
        Return the slot owning the 1-based positional occurrence 'index'.

        Raises UnexpectedArgumentError (carrying 'value') when every slot is
        already full.
        """
        position = bisect.bisect_left(self._bounds, index)
        if position == len(self._slots):
            raise UnexpectedArgumentError(value)
        return self._slots[position]

    def check_missing(self, index, /):
        """
        Verify that 'index' positionals satisfy every slot minimum.

        Raises MissingPositionalArgumentsError listing, in declaration order,
        the metavar of every slot whose threshold was not reached.
        """
        if not self._thresholds or index >= self._thresholds[-1][1]:
            return
        missing = [slot.metavar for slot, threshold in self._thresholds if index < threshold]
        if missing:
            raise MissingPositionalArgumentsError(missing)

    def __repr__(self):
        return "positionals(%s)" % ", ".join(
            "%s[%d, %s]%s" % (
                slot.metavar, slot.minimum, "inf" if slot.maximum is None else slot.maximum, "..." * slot.last
            ) for slot in self._slots
        )


__all__ = (
    "PositionalSlot",
    "Positionals",
)
