import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import (
    ALLOWED_ORIGIN,
    HOST,
    LOG_LEVEL,
    PORT,
    SESSION_TTL_SECONDS,
    SWEEP_INTERVAL_SECONDS,
)
from app.question_bank import Question, load_questions
from app.routes import start, submit
from app.test_engine.state import SessionStore

logger = logging.getLogger(__name__)


async def sweep_periodically(store: SessionStore, interval: float):
    while True:
        await asyncio.sleep(interval)
        # sweep may wait on readers; keep it off the event loop
        await run_in_threadpool(store.sweep)


def create_app(
    questions: Optional[Sequence[Question]] = None,
    store: Optional[SessionStore] = None,
    ttl: float = SESSION_TTL_SECONDS,
    sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    allowed_origin: str = ALLOWED_ORIGIN,
) -> FastAPI:
    if questions is None:
        questions = load_questions()
    if store is None:
        store = SessionStore(ttl=ttl)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if store.expiring and sweep_interval > 0:
            sweeper = asyncio.create_task(sweep_periodically(store, sweep_interval))
            logger.info("Session sweeper running every %ss (ttl %ss)", sweep_interval, store.ttl)

        yield

        if sweeper is not None:
            sweeper.cancel()
            try:
                await sweeper
            except asyncio.CancelledError:
                pass
            logger.info("Session sweeper stopped")

    app = FastAPI(title="Quiz API", lifespan=lifespan)
    app.state.store = store
    app.state.question_bank = tuple(questions)

    @app.middleware("http")
    async def cors(request: Request, call_next):
        # Preflight never reaches the routers
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)

        response.headers["Access-Control-Allow-Origin"] = allowed_origin
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "POST, GET, OPTIONS"
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"success": False, "error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.debug("Rejected body on %s: %s", request.url.path, exc.errors())
        return JSONResponse({"success": False, "error": "invalid json"}, status_code=400)

    @app.get("/health")
    def health(request: Request):
        return {"success": True, "sessions": len(request.app.state.store)}

    app.include_router(start.router)
    app.include_router(submit.router)

    return app


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


def run():
    logger.info("Server listening on %s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
