from datetime import date, timedelta
from typing import Any, List, Optional, Sequence

from weightlog.repositories.records import newest_first_key
from weightlog.services.weight_constants import TIME_RANGE_ALL, TIME_RANGE_DAYS, VALID_TIME_RANGES


class RangeFilter:

    @staticmethod
    def calculate_cutoff(time_range: str, today: Optional[date] = None) -> Optional[date]:
        """Earliest date kept for time_range, or None for 'all'."""
        if time_range == TIME_RANGE_ALL:
            return None

        days = TIME_RANGE_DAYS.get(time_range)
        if not days:
            raise ValueError(
                f"Invalid time_range. Valid options: {', '.join(VALID_TIME_RANGES)}"
            )

        today = today or date.today()
        return today - timedelta(days=days)

    @staticmethod
    def filter_by_range(
        entries: Sequence[Any],
        time_range: str,
        today: Optional[date] = None
    ) -> List[Any]:
        """
        Keep entries dated on or after today minus the range's days.

        Always returns a new list in the input's order; 'all' returns a copy
        of the whole input.
        """
        cutoff = RangeFilter.calculate_cutoff(time_range, today)
        if cutoff is None:
            return list(entries)

        return [e for e in entries if e.entry_date >= cutoff]

    @staticmethod
    def chronological(entries: Sequence[Any]) -> List[Any]:
        """Oldest first, same-day entries by creation time then id."""
        return sorted(entries, key=newest_first_key)

    @staticmethod
    def series_for_range(
        entries: Sequence[Any],
        time_range: str,
        today: Optional[date] = None
    ) -> List[Any]:
        """Filtered and sorted oldest first, ready for charting."""
        return RangeFilter.chronological(
            RangeFilter.filter_by_range(entries, time_range, today)
        )
