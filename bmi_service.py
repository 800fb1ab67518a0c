from __future__ import annotations
import logging
from typing import Optional

from algorithms import BMI, BMICategory, UnitConverter

LOGGER = logging.getLogger(__name__)


class BMICalculator:
    """State of the BMI calculator form."""

    def __init__(self, weight_unit: str = "kg", height_unit: str = "cm") -> None:
        if weight_unit not in UnitConverter.WEIGHT_UNITS:
            raise ValueError(f"unknown weight unit: {weight_unit}")
        if height_unit not in UnitConverter.HEIGHT_UNITS:
            raise ValueError(f"unknown height unit: {height_unit}")
        self.weight_text = ""
        self.height_cm_text = ""
        self.height_ft_text = ""
        self.height_in_text = ""
        self.weight_unit = weight_unit
        self.height_unit = height_unit
        self.result: Optional[float] = None
        self.category: Optional[BMICategory] = None
        self.is_showing_result = False

    @property
    def is_form_valid(self) -> bool:
        if not self.weight_text:
            return False
        if self.height_unit == "cm":
            return bool(self.height_cm_text)
        return bool(self.height_ft_text) and bool(self.height_in_text)

    def weight_kg(self) -> float:
        return UnitConverter.to_kilograms(self.weight_text, self.weight_unit)

    def height_m(self) -> float:
        if self.height_unit == "cm":
            return UnitConverter.to_meters(self.height_cm_text, "cm")
        return UnitConverter.to_meters(
            (self.height_ft_text, self.height_in_text), "ft_in"
        )

    def calculate(self) -> Optional[float]:
        """Compute and store the BMI; leave the form untouched on invalid input."""
        if not self.is_form_valid:
            return None
        value = BMI.compute(self.weight_kg(), self.height_m())
        if value is None:
            LOGGER.debug("skipping BMI for non-positive weight or height")
            return None
        self.result = value
        self.category = BMI.classify(value)
        self.is_showing_result = True
        return value

    def reset(self) -> None:
        """Return to the input form, keeping the entered values."""
        self.is_showing_result = False
