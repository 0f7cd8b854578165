from typing import Any, Dict, List, Optional

from weightlog.services.weight_constants import BMI_GAUGE_MIN, BMI_GAUGE_MAX


# Reference table shown next to the gauge
BMI_RANGES: List[Dict[str, str]] = [
    {
        'range': '< 18.5',
        'category': 'Underweight',
        'description': 'May indicate malnutrition or other health problems'
    },
    {
        'range': '18.5 - 24.9',
        'category': 'Normal weight',
        'description': 'Generally good overall health indicators'
    },
    {
        'range': '25.0 - 29.9',
        'category': 'Overweight',
        'description': 'May increase risk of health problems'
    },
    {
        'range': '>= 30',
        'category': 'Obese',
        'description': 'Increased risk of several health conditions'
    }
]


class BmiEngine:

    @staticmethod
    def calculate_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
        """BMI rounded to one decimal, or None when weight or height is missing or zero."""
        if not weight_kg or not height_cm:
            return None

        height_m = height_cm / 100
        return round(weight_kg / (height_m * height_m), 1)

    @staticmethod
    def get_category(bmi: float) -> str:
        if bmi < 18.5:
            return 'Underweight'
        if bmi < 25:
            return 'Normal weight'
        if bmi < 30:
            return 'Overweight'
        return 'Obese'

    @staticmethod
    def gauge_progress(bmi: float) -> float:
        """
        Position of bmi on a 15-35 gauge as a percentage.
        Not clamped: values outside 15-35 fall outside 0-100.
        """
        return (bmi - BMI_GAUGE_MIN) / (BMI_GAUGE_MAX - BMI_GAUGE_MIN) * 100

    @staticmethod
    def summarize(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[Dict[str, Any]]:
        bmi = BmiEngine.calculate_bmi(weight_kg, height_cm)
        if bmi is None:
            return None

        return {
            'bmi': bmi,
            'category': BmiEngine.get_category(bmi),
            'progress': round(BmiEngine.gauge_progress(bmi), 2)
        }
