from .base import WorkingHoursCalculator
from .standard_calculator import StandardWorkingHoursCalculator, calculate_working_hours

__all__ = ["WorkingHoursCalculator", "StandardWorkingHoursCalculator", "calculate_working_hours"]
