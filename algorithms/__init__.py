from .math_tools import MathTools
from .unit_converter import ParseResult, UnitConverter
from .bmi import BMI, BMICategory

__all__ = ["MathTools", "ParseResult", "UnitConverter", "BMI", "BMICategory"]
