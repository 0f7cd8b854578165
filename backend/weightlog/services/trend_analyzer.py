from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from scipy import stats

from weightlog.services.weight_constants import FLAT_TREND_THRESHOLD_KG


class StepDirection(str, Enum):
    """Direction of change from the next-older entry"""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class TrendAnalyzer:
    """Aggregate statistics and per-entry trends over a weight series."""

    # Slopes below this (kg/day) are reported as stable
    STABLE_SLOPE_KG_PER_DAY = 0.01

    @staticmethod
    def analyze(entries: Sequence[Any]) -> Optional[Dict[str, Any]]:
        """
        Summarize a series of entries ordered newest first.

        Returns:
            Dictionary with average, lowest, highest, net_change, is_gain and
            count, or None when there are no entries
        """
        if not entries:
            return None

        weights = np.array([float(e.weight) for e in entries])

        # Newest minus oldest; positive means weight was gained
        net_change = float(entries[0].weight) - float(entries[-1].weight)

        return {
            'count': len(entries),
            'average': round(float(np.mean(weights)), 1),
            'lowest': float(np.min(weights)),
            'highest': float(np.max(weights)),
            'net_change': round(net_change, 1),
            'is_gain': net_change > 0
        }

    @staticmethod
    def step_trend(entry: Any, index: int, entries: Sequence[Any]) -> Optional[Dict[str, Any]]:
        """
        Compare an entry with entries[index + 1], its next-older neighbour.

        The oldest entry has nothing to compare against and yields None.
        """
        if index >= len(entries) - 1:
            return None

        difference = float(entry.weight) - float(entries[index + 1].weight)

        if abs(difference) < FLAT_TREND_THRESHOLD_KG:
            return {'direction': StepDirection.FLAT, 'difference': 0.0}

        return {
            'direction': StepDirection.UP if difference > 0 else StepDirection.DOWN,
            'difference': round(abs(difference), 1)
        }

    @staticmethod
    def step_trends(entries: Sequence[Any]) -> List[Dict[str, Any]]:
        """Step trend for every entry, keyed by entry id."""
        trends = []
        for index, entry in enumerate(entries):
            trends.append({
                'entry_id': entry.id,
                'trend': TrendAnalyzer.step_trend(entry, index, entries)
            })
        return trends

    @staticmethod
    def regression_trend(entries: Sequence[Any]) -> Optional[Dict[str, Any]]:
        """
        Least-squares trend line over the series, in kg per day.

        Entries may be in any order. Needs at least two distinct dates.
        """
        if len(entries) < 2:
            return None

        ordered = sorted(entries, key=lambda e: e.entry_date)
        first_date = ordered[0].entry_date
        x_values = np.array([(e.entry_date - first_date).days for e in ordered], dtype=float)
        y_values = np.array([float(e.weight) for e in ordered])

        if np.all(x_values == x_values[0]):
            return None

        result = stats.linregress(x_values, y_values)
        slope = float(result.slope)
        intercept = float(result.intercept)

        if abs(slope) < TrendAnalyzer.STABLE_SLOPE_KG_PER_DAY:
            direction = 'stable'
        elif slope > 0:
            direction = 'increasing'
        else:
            direction = 'decreasing'

        last_x = float(x_values[-1])

        return {
            'direction': direction,
            'slope_kg_per_day': round(slope, 4),
            'weekly_change_kg': round(slope * 7, 2),
            'correlation': round(float(result.rvalue), 4),
            'start': {
                'date': first_date.isoformat(),
                'value': round(intercept, 2)
            },
            'end': {
                'date': ordered[-1].entry_date.isoformat(),
                'value': round(intercept + slope * last_x, 2)
            }
        }
