"""
Thresholds shared by the validator, analyzers and API layer.
Kept apart from the services to avoid circular imports.
"""

# Realistic weight bounds (kg)
WEIGHT_MIN_KG = 20
WEIGHT_MAX_KG = 300
# Largest plausible jump from the most recent entry (kg)
WEIGHT_MAX_CHANGE_KG = 20

# Step trends below this difference (kg) count as flat
FLAT_TREND_THRESHOLD_KG = 0.1

HEIGHT_MIN_CM = 0
HEIGHT_MAX_CM = 300

# Relative time windows for graphs and stats
TIME_RANGE_DAYS = {
    'week': 7,
    'month': 30,
    '3months': 90
}
TIME_RANGE_ALL = 'all'
VALID_TIME_RANGES = list(TIME_RANGE_DAYS.keys()) + [TIME_RANGE_ALL]

# BMI gauge bounds
BMI_GAUGE_MIN = 15
BMI_GAUGE_MAX = 35


def is_valid_time_range(time_range: str) -> bool:
    return time_range in VALID_TIME_RANGES
