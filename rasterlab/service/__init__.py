"""HTTP service exposing the rasterizers (FastAPI)."""

from rasterlab.service.app import build_router, create_app

__all__ = ["build_router", "create_app"]
