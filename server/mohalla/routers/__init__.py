"""API routers for the Mohalla directory."""

from mohalla.routers import houses, resources  # noqa: F401
