from datetime import date, timedelta

import pytest

from budget_core.boundaries import boundaries, next_start, prev_start
from budget_core.domain import RecurrenceFrequency

W = RecurrenceFrequency.WEEKLY
BW = RecurrenceFrequency.BIWEEKLY
M = RecurrenceFrequency.MONTHLY
Q = RecurrenceFrequency.QUARTERLY
A = RecurrenceFrequency.ANNUALLY


def test_weekly_is_monday_to_sunday():
    p = boundaries(date(2024, 7, 17), W)
    assert p.start == date(2024, 7, 15)
    assert p.end == date(2024, 7, 21)
    assert p.start.weekday() == 0
    assert p.end.weekday() == 6
    assert p.label == "Week of Jul 15, 2024 (W29)"


def test_weekly_anchor_on_monday_and_sunday():
    assert boundaries(date(2024, 7, 15), W).start == date(2024, 7, 15)
    assert boundaries(date(2024, 7, 21), W).start == date(2024, 7, 15)


def test_weekly_across_year_end():
    p = boundaries(date(2025, 1, 1), W)
    assert p.start == date(2024, 12, 30)
    assert p.end == date(2025, 1, 5)


def test_biweekly_starts_on_anchor():
    p = boundaries(date(2024, 1, 3), BW)
    assert p.start == date(2024, 1, 3)
    assert p.end == date(2024, 1, 16)
    assert p.label == "Bi-Week Jan 03, 2024"


def test_monthly_leap_february():
    p = boundaries(date(2024, 2, 10), M)
    assert p.start == date(2024, 2, 1)
    assert p.end == date(2024, 2, 29)
    assert p.label == "February 2024"


def test_quarterly():
    p = boundaries(date(2024, 5, 20), Q)
    assert p.start == date(2024, 4, 1)
    assert p.end == date(2024, 6, 30)
    assert p.label == "Q2 2024"
    assert boundaries(date(2024, 12, 31), Q).start == date(2024, 10, 1)


def test_annually():
    p = boundaries(date(2024, 5, 20), A)
    assert p.start == date(2024, 1, 1)
    assert p.end == date(2024, 12, 31)
    assert p.label == "2024"


@pytest.mark.parametrize("freq", list(RecurrenceFrequency))
def test_start_never_after_end(freq):
    anchor = date(2023, 11, 28)
    for i in range(0, 800, 7):
        p = boundaries(anchor + timedelta(days=i), freq)
        assert p.start <= p.end
        assert p.start <= anchor + timedelta(days=i) <= p.end


@pytest.mark.parametrize("freq", list(RecurrenceFrequency))
def test_labels_are_stable(freq):
    assert boundaries(date(2024, 3, 9), freq).label == boundaries(date(2024, 3, 9), freq).label


def test_next_start_aligns_to_calendar():
    assert next_start(date(2024, 3, 15), M) == date(2024, 4, 1)
    assert next_start(date(2024, 1, 3), W) == date(2024, 1, 8)
    assert next_start(date(2024, 2, 10), Q) == date(2024, 4, 1)
    assert next_start(date(2020, 6, 1), A) == date(2021, 1, 1)


def test_biweekly_next_and_prev_keep_the_chain():
    assert next_start(date(2024, 1, 1), BW) == date(2024, 1, 15)
    assert prev_start(date(2024, 1, 15), BW) == date(2024, 1, 1)


def test_prev_start_is_previous_period():
    assert prev_start(date(2024, 4, 1), M) == date(2024, 3, 1)
    assert prev_start(date(2024, 1, 1), M) == date(2023, 12, 1)
    assert prev_start(date(2024, 1, 1), Q) == date(2023, 10, 1)
    assert prev_start(date(2024, 1, 8), W) == date(2024, 1, 1)
    assert prev_start(date(2024, 1, 1), A) == date(2023, 1, 1)


def test_end_of_date_range_raises_overflow():
    with pytest.raises(OverflowError):
        next_start(date(9999, 12, 1), M)
