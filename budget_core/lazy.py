import logging
from datetime import date
from typing import Callable, Iterable, Iterator

from budget_core.boundaries import next_start, prev_start
from budget_core.domain import RecurrenceFrequency, Transaction

logger = logging.getLogger(__name__)


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def walk_forward(
    start: date, freq: RecurrenceFrequency, ceiling: date
) -> Iterator[date]:
    """Yield occurrence starts from start onward, up to and including ceiling."""
    current = start
    while current <= ceiling:
        yield current
        try:
            current = next_start(current, freq)
        except OverflowError:
            logger.debug("Forward walk hit the end of the date range at %s", current)
            return


def walk_backward(
    start: date, freq: RecurrenceFrequency, origin: date, floor: date
) -> Iterator[date]:
    """Yield the occurrence starts before start, newest first.

    The chain never goes below origin: a step that would land before it is
    clamped to origin, which is then the last value yielded. Starts before
    floor end the walk.
    """
    current = start
    while current > origin:
        try:
            current = max(prev_start(current, freq), origin)
        except OverflowError:
            current = origin
        if current < floor:
            logger.debug("Backward walk reached the horizon at %s", floor)
            return
        yield current
