"""Scheduling Module (``workforce_modules.scheduling``): planned daily shifts."""

from workforce_modules.scheduling.models import SHIFT_TIMES, Shift, ShiftType

__all__ = ["SHIFT_TIMES", "Shift", "ShiftType"]
