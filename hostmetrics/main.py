from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from hostmetrics.config import settings
from hostmetrics.listener import MetricsListener

logger = logging.getLogger(__name__)


def create_app(listener: MetricsListener | None = None) -> FastAPI:
    """Build the host app with the metrics listener mounted ahead of its routes.

    An injected listener is attached right away; otherwise the lifespan builds
    one from settings. Either way the lifespan starts and stops it.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ── startup ───────────────────────────────────────
        owned = getattr(app.state, "listener", None) is None
        if owned:
            app.state.listener = MetricsListener(
                settings.api_path,
                settings.interval_ms,
                bootstrap_retry=settings.bootstrap_retry_seconds,
            )
        active: MetricsListener = app.state.listener
        await active.start()
        logger.info("%s started", settings.app_name)

        yield

        # ── shutdown ──────────────────────────────────────
        await active.stop()
        if owned:
            del app.state.listener
        logger.info("%s shut down", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    if listener is not None:
        app.state.listener = listener

    @app.middleware("http")
    async def metrics_listener(request: Request, call_next):
        dispatch = await request.app.state.listener.handle(request.url.path)
        if dispatch.claimed:
            return dispatch.response
        return await call_next(request)

    @app.get("/")
    async def root(request: Request) -> dict:
        return {"status": "running", "metrics": request.app.state.listener.api_path}

    return app


app = create_app()


def run() -> None:
    level = "debug" if settings.debug else settings.log_level
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=level)
