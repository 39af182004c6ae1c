"""Admin API endpoints."""

from src.api.admin.endpoints import router

__all__ = ["router"]
