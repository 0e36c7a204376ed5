from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from settings import Settings, configure_logging, get_settings

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    from store import build_store

    app.state.store = build_store(app.state.settings)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.public_endpoints import install_public, resolve_version, router as public_router

    if settings is None:
        settings = get_settings()
    configure_logging(settings.loglevel)

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.version = resolve_version()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(public_router)

    # Static files are mounted at "/" and must come last.
    install_public(app, settings.public_dir)

    logger.info(
        "APP: %s (hoodie-store %s) public=%s data=%s in_memory=%s",
        settings.name,
        app.state.version,
        settings.public_dir,
        settings.data_dir,
        settings.in_memory,
    )
    return app


app = create_app()
