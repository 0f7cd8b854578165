from datetime import date, datetime, timedelta

import pytest

from weightlog.services.range_filter import RangeFilter
from conftest import make_entry

TODAY = date(2024, 3, 31)


@pytest.fixture
def history():
    # Newest first, spanning about four months
    return [
        make_entry('6', 70.0, TODAY),
        make_entry('5', 70.5, TODAY - timedelta(days=7)),
        make_entry('4', 71.0, TODAY - timedelta(days=8)),
        make_entry('3', 72.0, TODAY - timedelta(days=30)),
        make_entry('2', 73.0, TODAY - timedelta(days=90)),
        make_entry('1', 74.0, TODAY - timedelta(days=120)),
    ]


def test_week_keeps_entries_on_or_after_cutoff(history):
    result = RangeFilter.filter_by_range(history, 'week', today=TODAY)
    assert [e.id for e in result] == ['6', '5']
    cutoff = TODAY - timedelta(days=7)
    assert result == [e for e in history if e.entry_date >= cutoff]


def test_month_and_three_months(history):
    assert [e.id for e in RangeFilter.filter_by_range(history, 'month', today=TODAY)] == ['6', '5', '4', '3']
    assert [e.id for e in RangeFilter.filter_by_range(history, '3months', today=TODAY)] == ['6', '5', '4', '3', '2']


def test_all_returns_full_input_unreordered(history):
    shuffled = [history[2], history[0], history[5], history[1], history[4], history[3]]
    result = RangeFilter.filter_by_range(shuffled, 'all', today=TODAY)

    assert result == shuffled
    assert result is not shuffled


def test_filter_does_not_mutate_input(history):
    original = list(history)
    RangeFilter.filter_by_range(history, 'week', today=TODAY)
    assert history == original


def test_cutoff_uses_calendar_days():
    # Crosses a month boundary
    assert RangeFilter.calculate_cutoff('week', today=date(2024, 3, 3)) == date(2024, 2, 25)
    assert RangeFilter.calculate_cutoff('all', today=date(2024, 3, 3)) is None


def test_invalid_range_raises(history):
    with pytest.raises(ValueError, match='Invalid time_range'):
        RangeFilter.filter_by_range(history, 'fortnight')


def test_series_for_range_is_oldest_first(history):
    series = RangeFilter.series_for_range(history, 'month', today=TODAY)
    assert [e.id for e in series] == ['3', '4', '5', '6']


def test_chronological_breaks_same_day_ties_by_creation_time():
    day = date(2024, 1, 5)
    later = make_entry('a', 70.0, day, created_at=datetime(2024, 1, 5, 20, 0))
    earlier = make_entry('b', 71.0, day, created_at=datetime(2024, 1, 5, 7, 0))

    assert RangeFilter.chronological([later, earlier]) == [earlier, later]


def test_chronological_orders_numeric_ids_as_numbers():
    day = date(2024, 1, 5)
    ninth = make_entry('9', 70.0, day)
    tenth = make_entry('10', 71.0, day)

    assert RangeFilter.chronological([tenth, ninth]) == [ninth, tenth]
