"""
Workforce Modules.

Thin orchestration layers over the workforce kernel and engines.
Each module contains:
- Domain models (frozen dataclasses, the nouns)
- ORM models (SQLAlchemy persistence with to_dto/from_dto)
- A service facade owning the transaction boundary

Modules:
- Attendance: geofenced daily check-in / check-out
- Requests: leave, sick and expense-claim approval
- Payroll: monthly payroll runs and CSV export
- Scheduling: planned daily shifts

Package ``__init__`` files export models only.  Services are imported
from their ``service`` modules, because the engines import the models.
"""
