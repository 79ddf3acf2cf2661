"""
FastAPI application entry point for the club submission service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clubboard import __version__
from clubboard.config import get_settings
from clubboard.errors import StoreUnavailableError
from clubboard.routes import router

logger = logging.getLogger(__name__)


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error("Store unavailable while handling %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage is unavailable"})


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("clubboard.app:app", host="0.0.0.0", port=8000)
