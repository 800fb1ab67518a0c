from __future__ import annotations

from typing import NamedTuple


class ParseResult(NamedTuple):
    """Outcome of parsing user-entered numeric text."""

    ok: bool
    value: float = 0.0


class UnitConverter:
    """Utility for converting weight and height into metric units."""

    LB_TO_KG = 0.453592
    INCH_TO_M = 0.0254
    WEIGHT_UNITS = ("kg", "lb")
    HEIGHT_UNITS = ("cm", "ft_in")

    @staticmethod
    def parse_number(value: str | float | int | None) -> ParseResult:
        """Parse ``value`` into a float without raising."""
        if value is None or isinstance(value, bool):
            return ParseResult(False)
        if isinstance(value, (int, float)):
            return ParseResult(True, float(value))
        text = str(value).strip()
        if not text:
            return ParseResult(False)
        try:
            return ParseResult(True, float(text))
        except ValueError:
            return ParseResult(False)

    @classmethod
    def coerce_number(cls, value: str | float | int | None) -> float:
        """Return ``value`` as a float, or 0.0 when it is not numeric."""
        result = cls.parse_number(value)
        return result.value if result.ok else 0.0

    @classmethod
    def to_kilograms(cls, value: str | float, unit: str = "kg") -> float:
        """Convert ``value`` in ``unit`` to kilograms."""
        weight = cls.coerce_number(value)
        if unit == "kg":
            return weight
        if unit == "lb":
            return weight * cls.LB_TO_KG
        raise ValueError(f"unknown weight unit: {unit}")

    @classmethod
    def to_meters(
        cls,
        height: str | float | tuple,
        unit: str = "cm",
    ) -> float:
        """Convert ``height`` to meters.

        For ``cm`` the height is a single value. For ``ft_in`` it is a
        ``(feet, inches)`` pair.
        """
        if unit == "cm":
            return cls.coerce_number(height) / 100
        if unit == "ft_in":
            feet, inches = height
            total_inches = cls.coerce_number(feet) * 12 + cls.coerce_number(inches)
            return total_inches * cls.INCH_TO_M
        raise ValueError(f"unknown height unit: {unit}")

