"""Attendance Module (``workforce_modules.attendance``): daily shifts gated by geofences."""

from workforce_modules.attendance.models import AttendanceRecord, AttendanceStatus

__all__ = ["AttendanceRecord", "AttendanceStatus"]
