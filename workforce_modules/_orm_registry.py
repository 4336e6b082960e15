"""
Module ORM Registry (``workforce_modules._orm_registry``).

Imports every ``workforce_modules.*.orm`` module so that
``Base.metadata`` holds all table definitions before
``workforce_kernel.db.engine.create_tables()`` runs.  Idempotent.
"""


def import_all_orm_models() -> None:
    """Register every module ORM model on ``Base.metadata``."""
    import workforce_modules.attendance.orm  # noqa: F401
    import workforce_modules.payroll.orm  # noqa: F401
    import workforce_modules.requests.orm  # noqa: F401
    import workforce_modules.scheduling.orm  # noqa: F401
