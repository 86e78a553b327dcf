from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from . import __version__
from .config import Settings
from .db import Base, make_engine, make_session_factory
from .ratelimit import SlidingWindowLimiter
from .recommender import DurationRecommender
from .routers import ai, auth, board, properties, settings as settings_routes, tasks, ui

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    engine = make_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="taskboard", version=__version__)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.recommender = DurationRecommender(settings)
    app.state.ai_limiter = SlidingWindowLimiter(settings.ai_rate_limit, settings.ai_rate_window_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins), allow_methods=["*"], allow_headers=["*"], allow_credentials=True,
    )
    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, same_site="lax")
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(properties.router)
    app.include_router(settings_routes.router)
    app.include_router(ai.router)
    app.include_router(board.router)
    app.include_router(ui.router)

    logger.info("taskboard %s ready (database %s)", __version__, engine.url.render_as_string(hide_password=True))
    return app
