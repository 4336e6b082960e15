"""
Scheduling Domain Models (``workforce_modules.scheduling.models``).

Planned shifts, one per employee per day.  A shift of a known type gets
the standard hours from ``SHIFT_TIMES`` unless explicit times are given.
Scheduling is advisory: attendance never checks against it.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from uuid import UUID


class ShiftType(Enum):
    """Standard shift patterns."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    FULL_DAY = "full_day"


SHIFT_TIMES: dict[ShiftType, tuple[time, time]] = {
    ShiftType.MORNING: (time(6, 0), time(14, 0)),
    ShiftType.AFTERNOON: (time(14, 0), time(22, 0)),
    ShiftType.FULL_DAY: (time(6, 0), time(22, 0)),
}


@dataclass(frozen=True)
class Shift:
    """One employee's planned shift on one calendar day."""
    employee_id: str
    shift_date: date
    shift_type: ShiftType
    start_time: time | None = None
    end_time: time | None = None
    is_published: bool = False
    id: UUID | None = None

    def __post_init__(self):
        object.__setattr__(self, "shift_type", ShiftType(self.shift_type))
        default_start, default_end = SHIFT_TIMES[self.shift_type]
        if self.start_time is None:
            object.__setattr__(self, "start_time", default_start)
        if self.end_time is None:
            object.__setattr__(self, "end_time", default_end)
        if self.end_time <= self.start_time:
            raise ValueError(
                f"end_time {self.end_time} is not after start_time {self.start_time}"
            )

    @property
    def scheduled_minutes(self) -> int:
        start = datetime.combine(self.shift_date, self.start_time)
        end = datetime.combine(self.shift_date, self.end_time)
        return int((end - start).total_seconds() // 60)
