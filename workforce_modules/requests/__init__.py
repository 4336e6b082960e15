"""Requests Module (``workforce_modules.requests``): leave, sick and claim approval."""

from workforce_modules.requests.models import (
    ABSENCE_TYPES,
    ALLOWED_TRANSITIONS,
    LeaveRequest,
    RequestStatus,
    RequestType,
)

__all__ = [
    "ABSENCE_TYPES",
    "ALLOWED_TRANSITIONS",
    "LeaveRequest",
    "RequestStatus",
    "RequestType",
]
