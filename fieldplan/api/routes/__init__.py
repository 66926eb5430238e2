"""API routes package."""

from fieldplan.api.routes import schedules

__all__ = [
    "schedules",
]
