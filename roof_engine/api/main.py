"""FastAPI application factory."""

from __future__ import annotations
import logging
from typing import Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roof_engine.api.routes import router
from roof_engine.core.errors import RoofGeometryError

logger = logging.getLogger(__name__)


async def _geometry_error(request: Request, exc: RoofGeometryError) -> JSONResponse:
    """Engine errors are bad input: 422 with the engine's message."""
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(allow_origins: Sequence[str] = ("*",)) -> FastAPI:
    app = FastAPI(
        title="Roof Geometry Engine",
        description="Roof measurement, facet splitting and pattern detection",
        version="0.1.0",
    )

    # The canvas editors are served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allow_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RoofGeometryError, _geometry_error)

    app.include_router(router, prefix="/api")
    return app


app = create_app()
