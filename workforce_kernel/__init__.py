"""
Workforce Kernel

Shared infrastructure for the workforce packages:
- Structured JSON logging with request-scoped context
- Typed exceptions carrying machine-readable codes
- Injectable clock
- SQLAlchemy declarative base and session management
"""

__version__ = "0.1.0"
