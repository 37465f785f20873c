"""API routers for all endpoints."""

from infracascade.routers import cascades, system

__all__ = [
    "cascades",
    "system",
]
