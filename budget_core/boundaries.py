"""Calendar boundaries of a single budget occurrence.

``boundaries`` maps an anchor date and a frequency to the period that
contains it; ``next_start`` / ``prev_start`` move an occurrence start one
step along the chain. Weekly, monthly, quarterly and annual periods are
calendar aligned. Biweekly periods are not: they are 14-day windows that
start on the anchor itself, so a biweekly chain only ever lines up with the
budget's own original start date.
"""

from datetime import date
from functools import lru_cache

from dateutil.relativedelta import MO, relativedelta

from budget_core.dates import shift
from budget_core.domain import Period, RecurrenceFrequency

# One step of the occurrence chain per frequency.
STEPS: dict[RecurrenceFrequency, relativedelta] = {
    RecurrenceFrequency.WEEKLY: relativedelta(weeks=1),
    RecurrenceFrequency.BIWEEKLY: relativedelta(weeks=2),
    RecurrenceFrequency.MONTHLY: relativedelta(months=1),
    RecurrenceFrequency.QUARTERLY: relativedelta(months=3),
    RecurrenceFrequency.ANNUALLY: relativedelta(years=1),
}


def period_start(anchor: date, freq: RecurrenceFrequency) -> date:
    """First day of the period containing anchor."""
    if freq is RecurrenceFrequency.WEEKLY:
        return anchor + relativedelta(weekday=MO(-1))
    if freq is RecurrenceFrequency.BIWEEKLY:
        return anchor
    if freq is RecurrenceFrequency.MONTHLY:
        return anchor.replace(day=1)
    if freq is RecurrenceFrequency.QUARTERLY:
        return date(anchor.year, 3 * ((anchor.month - 1) // 3) + 1, 1)
    if freq is RecurrenceFrequency.ANNUALLY:
        return date(anchor.year, 1, 1)
    raise ValueError(f"Unknown recurrence frequency: {freq!r}")


def period_label(start: date, freq: RecurrenceFrequency) -> str:
    if freq is RecurrenceFrequency.WEEKLY:
        return f"Week of {start:%b %d, %Y} (W{start.isocalendar()[1]:02d})"
    if freq is RecurrenceFrequency.BIWEEKLY:
        return f"Bi-Week {start:%b %d, %Y}"
    if freq is RecurrenceFrequency.MONTHLY:
        return f"{start:%B %Y}"
    if freq is RecurrenceFrequency.QUARTERLY:
        return f"Q{(start.month - 1) // 3 + 1} {start.year}"
    return f"{start.year}"


@lru_cache(maxsize=4096)
def boundaries(anchor: date, freq: RecurrenceFrequency) -> Period:
    """Period of the given frequency containing anchor.

    Raises OverflowError for periods at the very end of the date range
    (the step to the next period start must stay representable).
    """
    start = period_start(anchor, freq)
    end = shift(start, STEPS[freq] + relativedelta(days=-1))
    return Period(start=start, end=end, label=period_label(start, freq))


def next_start(anchor: date, freq: RecurrenceFrequency) -> date:
    """Start of the occurrence following the one that starts at anchor."""
    return shift(period_start(anchor, freq), STEPS[freq])


def prev_start(anchor: date, freq: RecurrenceFrequency) -> date:
    """Start of the occurrence preceding the one that starts at anchor."""
    return shift(period_start(anchor, freq), -STEPS[freq])
