from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from weightlog.services.weight_constants import (
    WEIGHT_MIN_KG,
    WEIGHT_MAX_KG,
    WEIGHT_MAX_CHANGE_KG,
)


class ValidationErrorKind(Enum):
    """Reasons a candidate weight is rejected"""
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    IMPLAUSIBLE_CHANGE = "implausible_change"


@dataclass(frozen=True)
class WeightValidationError:
    kind: ValidationErrorKind
    message: str
    delta: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'kind': self.kind.value, 'message': self.message}
        if self.delta is not None:
            result['delta'] = round(self.delta, 1)
        return result


class EntryValidator:
    """Plausibility checks for a weight about to be stored."""

    @staticmethod
    def validate(
        candidate_weight_kg: float,
        recent_entries: Sequence[Any],
        is_new_entry: bool = True
    ) -> Optional[WeightValidationError]:
        """
        Check a candidate weight against absolute bounds and the latest entry.

        Args:
            candidate_weight_kg: Weight being submitted
            recent_entries: Existing entries, newest first
            is_new_entry: False for edits; edits are not compared with the
                latest entry so historical values can be corrected

        Returns:
            The first failing rule as a WeightValidationError, or None
        """
        if candidate_weight_kg < WEIGHT_MIN_KG:
            return WeightValidationError(
                ValidationErrorKind.BELOW_MINIMUM,
                f"Weight cannot be less than {WEIGHT_MIN_KG}kg"
            )

        if candidate_weight_kg > WEIGHT_MAX_KG:
            return WeightValidationError(
                ValidationErrorKind.ABOVE_MAXIMUM,
                f"Weight cannot exceed {WEIGHT_MAX_KG}kg"
            )

        if is_new_entry and recent_entries:
            last_weight = recent_entries[0].weight
            change = abs(candidate_weight_kg - last_weight)
            if change > WEIGHT_MAX_CHANGE_KG:
                return WeightValidationError(
                    ValidationErrorKind.IMPLAUSIBLE_CHANGE,
                    f"Weight change of {change:.1f}kg seems unrealistic. Please verify.",
                    delta=change
                )

        return None
