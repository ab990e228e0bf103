"""Read-only HTTP endpoint serving the clip catalog."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from clipdeck import __version__
from clipdeck.api.store import ClipStore

logger = logging.getLogger(__name__)


def create_app(store: ClipStore) -> FastAPI:
    """Build the FastAPI app around *store*."""
    app = FastAPI(title="Summoner Highlights API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse("/api/clips")

    @app.get("/api/clips")
    def list_clips():
        try:
            rows = store.list_clips()
        except SQLAlchemyError:
            logger.exception("Failed to fetch clips")
            return JSONResponse(status_code=500, content={"message": "Unable to fetch clips"})
        return JSONResponse(content=jsonable_encoder(rows))

    @app.get("/health")
    def health():
        try:
            store.ping()
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return JSONResponse(status_code=500, content={"ok": False})
        return {"ok": True}

    return app
