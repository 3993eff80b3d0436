"""
Behavioral Recommender: FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup/shutdown hooks."""
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title="Behavioral Recommender API",
        description="Behavioral profiling from interaction events and bandit-ranked recommendations",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup():
        state = get_state()
        ok, errors = state.config.validate()
        for error in errors:
            logger.warning("[startup] Config: %s", error)
        logger.info(
            "[startup] Ready (data_source=%s, catalog=%d items, config_valid=%s)",
            state.config.data_source, len(state.catalog.get_published_content()), ok,
        )

    @app.on_event("shutdown")
    def _shutdown():
        get_state().publisher.close()

    return app


app = create_app()
