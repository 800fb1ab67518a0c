from __future__ import annotations

from enum import Enum
from typing import Optional


class BMICategory(Enum):
    """WHO body mass index bands, ordered from lowest to highest."""

    SEVERE_THINNESS = ("severe_thinness", "Severe Thinness", "< 16", "blue")
    MODERATE_THINNESS = ("moderate_thinness", "Moderate Thinness", "16 - 17", "blue")
    MILD_THINNESS = ("mild_thinness", "Mild Thinness", "17 - 18.5", "blue")
    NORMAL = ("normal", "Normal", "18.5 - 25", "green")
    OVERWEIGHT = ("overweight", "Overweight", "25 - 30", "orange")
    OBESE_CLASS_1 = ("obese_class_1", "Obese (Class I)", "30 - 35", "red")
    OBESE_CLASS_2 = ("obese_class_2", "Obese (Class II)", "35 - 40", "red")
    OBESE_CLASS_3 = ("obese_class_3", "Obese (Class III)", "> 40", "red")

    def __init__(self, key: str, description: str, range_label: str, color: str) -> None:
        self.key = key
        self.description = description
        self.range_label = range_label
        self.color = color


class BMI:
    """Body mass index formula and classification."""

    # Exclusive upper bounds; anything at or above the last bound is class III.
    UPPER_BOUNDS: tuple[tuple[float, BMICategory], ...] = (
        (16.0, BMICategory.SEVERE_THINNESS),
        (17.0, BMICategory.MODERATE_THINNESS),
        (18.5, BMICategory.MILD_THINNESS),
        (25.0, BMICategory.NORMAL),
        (30.0, BMICategory.OVERWEIGHT),
        (35.0, BMICategory.OBESE_CLASS_1),
        (40.0, BMICategory.OBESE_CLASS_2),
    )

    @staticmethod
    def compute(weight_kg: float, height_m: float) -> Optional[float]:
        """Return ``weight_kg / height_m**2`` or ``None`` for non-positive input."""
        if weight_kg <= 0 or height_m <= 0:
            return None
        return weight_kg / (height_m * height_m)

    @classmethod
    def classify(cls, bmi: float) -> BMICategory:
        """Map ``bmi`` to its band using half-open intervals."""
        for bound, category in cls.UPPER_BOUNDS:
            if bmi < bound:
                return category
        return BMICategory.OBESE_CLASS_3
