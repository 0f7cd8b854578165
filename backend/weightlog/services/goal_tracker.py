from enum import Enum
from typing import Any, Dict


class GoalDirection(str, Enum):
    GAIN = "gain"
    LOSE = "lose"


class GoalTracker:

    @staticmethod
    def goal_progress(current_weight_kg: float, goal_weight_kg: float) -> Dict[str, Any]:
        """
        Distance left to the goal weight.
        Callers handle "no goal set" themselves; a goal of 0 is not a missing goal.
        """
        direction = GoalDirection.GAIN if goal_weight_kg > current_weight_kg else GoalDirection.LOSE
        return {
            'remaining_kg': round(abs(current_weight_kg - goal_weight_kg), 1),
            'direction': direction
        }
