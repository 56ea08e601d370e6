"""HTTP boundary: JSON draw requests in, pixel lists out.

Routes (prefix from ``server.api_prefix``, default ``/api``):

    POST {prefix}/draw        DrawRequestV1 → DrawResponseV1
    GET  {prefix}/algorithms  canonical algorithm names
    GET  /health              liveness probe

Error mapping:
    - malformed JSON, wrong field types, negative radius → 400
    - coordinates beyond ``limits`` → 400
    - unknown algorithm → 400
    - wrong HTTP method → 405 (FastAPI default)

The rasterizer call is timed here (``elapsed`` in the response, ns); the
core never times itself.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rasterlab import __version__
from rasterlab.configs.loader import RasterLabConfig
from rasterlab.raster import dispatcher
from rasterlab.raster.types import UnsupportedAlgorithm
from rasterlab.utils import validators
from rasterlab.utils.logging_config import log_context

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=400)


def build_router(config: RasterLabConfig) -> APIRouter:
    """Draw routes bound to one configuration."""
    router = APIRouter(prefix=config.server.api_prefix, tags=["draw"])
    limits = config.limits

    @router.post("/draw", response_model=validators.DrawResponseV1)
    def draw(request: validators.DrawRequestV1):
        """Rasterize one primitive and return its samples in generation order."""
        try:
            validators.check_request_limits(
                request, limits.max_coordinate, limits.max_radius,
            )
            algo = dispatcher.get_algorithm(request.algorithm)
        except (UnsupportedAlgorithm, ValueError) as exc:
            logger.warning("Rejected draw request: %s", exc)
            return _bad_request(str(exc))

        with log_context(algorithm=algo.name):
            result = dispatcher.run(algo.name, request.fields())
            logger.info("Drew %d samples in %d ns", len(result), result.elapsed_ns)
        return result.to_response()

    @router.get("/algorithms")
    def algorithms():
        return {"algorithms": dispatcher.available_algorithms()}

    return router


def create_app(config: RasterLabConfig | None = None) -> FastAPI:
    """Application factory.

    Parameters
    ----------
    config : RasterLabConfig, optional
        Defaults to the built-in defaults (no file is read).
    """
    config = config or RasterLabConfig()

    app = FastAPI(title="RasterLab", version=__version__)
    app.state.config = config

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in errors
        ) or "invalid request"
        logger.warning("Invalid request to %s: %s", request.url.path, detail)
        return _bad_request(detail)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(build_router(config))
    return app
