"""
Typed exception hierarchy for the workforce kernel.

Every error a caller may want to react to has its own class, a static
``code`` class attribute (machine-readable, API-safe) and structured
attributes instead of a message to parse.

    WorkforceKernelError (base)
    |
    +-- ConfigurationError
    |
    +-- AttendanceError
    |   +-- OutsideGeofenceError
    |   +-- AlreadyCheckedInError
    |   +-- NotCheckedInError
    |
    +-- RequestError
    |   +-- RequestNotFoundError
    |   +-- InvalidRequestTransitionError
    |   +-- InvalidRequestError
    |
    +-- PayrollError
    |   +-- PayrollRunNotFoundError
    |
    +-- SchedulingError
        +-- ShiftNotFoundError
        +-- ShiftConflictError
        +-- InvalidShiftError

Code            | When raised
----------------|------------------------------------------------------
CONFIGURATION_ERROR          | YAML parsed but semantically invalid
OUTSIDE_GEOFENCE             | Check-in/out attempted beyond the fence radius
ALREADY_CHECKED_IN           | Second check-in on the same day
NOT_CHECKED_IN               | Check-out without an open attendance record
REQUEST_NOT_FOUND            | Unknown request id
INVALID_REQUEST_TRANSITION   | Deciding a request that is no longer pending
INVALID_REQUEST              | Malformed submission (e.g. claim without amount)
PAYROLL_RUN_NOT_FOUND        | Unknown payroll run id
SHIFT_NOT_FOUND              | Unknown shift id
SHIFT_CONFLICT               | Second shift for an employee on the same day
INVALID_SHIFT                | Shift ending before it starts, or an unknown field

The payroll calculator itself raises none of these: missing pay figures
and incomplete shifts degrade to zero.

Usage::

    try:
        attendance.check_in(employee_id, lat, lon)
    except OutsideGeofenceError as e:
        toast(f"{e.distance_meters:.0f}m away from {e.geofence}")
"""


class WorkforceKernelError(Exception):
    """Base exception for all workforce kernel errors."""

    code: str = "WORKFORCE_KERNEL_ERROR"


class ConfigurationError(WorkforceKernelError):
    """Configuration loaded but failed validation."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


# Attendance


class AttendanceError(WorkforceKernelError):
    """Base exception for attendance errors."""

    code: str = "ATTENDANCE_ERROR"


class OutsideGeofenceError(AttendanceError):
    """Position is farther from the fence centre than its radius."""

    code: str = "OUTSIDE_GEOFENCE"

    def __init__(self, geofence: str, distance_meters: float, radius_meters: float):
        self.geofence = geofence
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters
        super().__init__(
            f"Too far from {geofence} ({distance_meters:.0f}m away, "
            f"limit {radius_meters:.0f}m)"
        )


class AlreadyCheckedInError(AttendanceError):
    """Employee already has an attendance record for the day."""

    code: str = "ALREADY_CHECKED_IN"

    def __init__(self, employee_id: str, work_date: str):
        self.employee_id = employee_id
        self.work_date = work_date
        super().__init__(f"Employee {employee_id} already checked in on {work_date}")


class NotCheckedInError(AttendanceError):
    """Check-out requested without an open attendance record."""

    code: str = "NOT_CHECKED_IN"

    def __init__(self, employee_id: str, work_date: str):
        self.employee_id = employee_id
        self.work_date = work_date
        super().__init__(f"No check-in record found for {employee_id} on {work_date}")


# Requests


class RequestError(WorkforceKernelError):
    """Base exception for leave/sick/claim request errors."""

    code: str = "REQUEST_ERROR"


class RequestNotFoundError(RequestError):
    """Request with given ID was not found."""

    code: str = "REQUEST_NOT_FOUND"

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Request not found: {request_id}")


class InvalidRequestTransitionError(RequestError):
    """Approve/reject attempted on a request that already left pending."""

    code: str = "INVALID_REQUEST_TRANSITION"

    def __init__(self, request_id: str, from_status: str, to_status: str):
        self.request_id = request_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Request {request_id} cannot move from {from_status} to {to_status}"
        )


class InvalidRequestError(RequestError):
    """Submission is malformed."""

    code: str = "INVALID_REQUEST"

    def __init__(self, request_type: str, reason: str):
        self.request_type = request_type
        self.reason = reason
        super().__init__(f"Invalid {request_type} request: {reason}")


# Payroll


class PayrollError(WorkforceKernelError):
    """Base exception for payroll persistence errors."""

    code: str = "PAYROLL_ERROR"


class PayrollRunNotFoundError(PayrollError):
    """Payroll run with given ID was not found."""

    code: str = "PAYROLL_RUN_NOT_FOUND"

    def __init__(self, run_id: str):
        self.run_id = run_id
        super().__init__(f"Payroll run not found: {run_id}")


# Scheduling


class SchedulingError(WorkforceKernelError):
    """Base exception for shift scheduling errors."""

    code: str = "SCHEDULING_ERROR"


class ShiftNotFoundError(SchedulingError):
    """Shift with given ID was not found."""

    code: str = "SHIFT_NOT_FOUND"

    def __init__(self, shift_id: str):
        self.shift_id = shift_id
        super().__init__(f"Shift not found: {shift_id}")


class ShiftConflictError(SchedulingError):
    """The employee already has a shift on that day."""

    code: str = "SHIFT_CONFLICT"

    def __init__(self, employee_id: str, shift_date: str):
        self.employee_id = employee_id
        self.shift_date = shift_date
        super().__init__(f"Employee {employee_id} already has a shift on {shift_date}")


class InvalidShiftError(SchedulingError):
    """Shift data failed validation."""

    code: str = "INVALID_SHIFT"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid shift: {reason}")
