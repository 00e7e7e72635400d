"""HTTP API: routers and FastAPI dependencies."""

from erp.api.router import api_router

__all__ = ["api_router"]
