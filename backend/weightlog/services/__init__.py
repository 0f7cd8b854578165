from .entry_validator import EntryValidator, ValidationErrorKind, WeightValidationError
from .trend_analyzer import TrendAnalyzer, StepDirection
from .range_filter import RangeFilter
from .bmi_engine import BmiEngine, BMI_RANGES
from .goal_tracker import GoalTracker, GoalDirection
from .weight_service import WeightService, EntryValidationError

__all__ = [
    'EntryValidator',
    'ValidationErrorKind',
    'WeightValidationError',
    'TrendAnalyzer',
    'StepDirection',
    'RangeFilter',
    'BmiEngine',
    'BMI_RANGES',
    'GoalTracker',
    'GoalDirection',
    'WeightService',
    'EntryValidationError',
]
