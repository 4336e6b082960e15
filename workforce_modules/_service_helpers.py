"""Shared helpers for workforce module services."""

from uuid import NAMESPACE_URL, UUID, uuid5


def employee_actor_id(employee_id: str) -> UUID:
    """Stable audit actor id for actions an employee performs on their own records."""
    return uuid5(NAMESPACE_URL, f"employee:{employee_id}")
