"""
Pure domain layer.

No dependencies on ORM, database or I/O.  The clock is the only
time source services may use.
"""

from workforce_kernel.domain.clock import Clock, DeterministicClock, SystemClock

__all__ = ["Clock", "DeterministicClock", "SystemClock"]
