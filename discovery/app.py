# discovery/app.py
from __future__ import annotations

import hashlib
import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import FastAPI

from shared.logging import setup_json_logging
from .registry import RelationEntry, build_registry, validate_entries
from .routes import root
from .schemas import build_root_document, serialize
from .settings import Settings, get_settings

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_json_logging(settings.log_level)

    # registry and document are built once; a bad registry stops startup here
    explicit = app.state.explicit_registry
    if explicit is not None:
        entries = validate_entries(explicit)
    else:
        entries = build_registry(settings)
    document = build_root_document(entries, settings.public_base_url)
    body = serialize(document)

    app.state.registry = entries
    app.state.root_document = document
    app.state.root_body = body
    app.state.root_etag = f'"{hashlib.md5(body).hexdigest()}"'
    log.info(
        "root document ready",
        extra={"context": {"relations": len(entries), "base_url": settings.public_base_url}},
    )
    yield


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[Iterable[RelationEntry]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.explicit_registry = tuple(registry) if registry is not None else None
    app.include_router(root.router)

    @app.get("/health", tags=["meta"])
    def health():
        return {
            "ok": True,
            "env": app.state.settings.env,
            "relations": len(app.state.registry),
        }

    return app
