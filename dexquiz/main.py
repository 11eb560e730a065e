from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .answer import Verdict
from .catalog import CatalogClient
from .config import Settings, load_settings
from .regions import list_regions
from .session import QuizSession, SessionStateError, UnknownRegionError

logger = logging.getLogger(__name__)


class RegionRequest(BaseModel):
    region: str


class GuessRequest(BaseModel):
    slot_index: int
    text: str


def _log_completion(completion: dict) -> None:
    logger.info(
        "Region %s completed with score %s/%s",
        completion["display_name"],
        completion["score"],
        completion["total"],
    )


def _start_load(app: FastAPI, key: str) -> None:
    session: QuizSession = app.state.session
    generation = session.begin_region(key)
    task = asyncio.create_task(session.load(generation))
    app.state.load_tasks.add(task)
    task.add_done_callback(app.state.load_tasks.discard)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = httpx.AsyncClient(
            base_url=settings.catalog_base_url,
            timeout=settings.catalog_timeout,
            transport=transport,
        )
        catalog = CatalogClient(
            client,
            max_attempts=settings.max_attempts,
            retry_delay=settings.retry_delay,
            batch_threshold=settings.batch_threshold,
            batch_size=settings.batch_size,
            batch_delay=settings.batch_delay,
        )
        app.state.session = QuizSession(catalog, on_complete=_log_completion)
        app.state.load_tasks = set()
        if settings.default_region:
            _start_load(app, settings.default_region)
        yield
        for task in list(app.state.load_tasks):
            task.cancel()
        await client.aclose()

    app = FastAPI(lifespan=lifespan)

    cors_origins_raw = os.getenv("CORS_ORIGINS", "*").strip()
    cors_origins = (
        ["*"]
        if cors_origins_raw == "*"
        else [origin.strip() for origin in cors_origins_raw.split(",") if origin.strip()]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/regions")
    def regions():
        return list_regions()

    # Session endpoints are async so they share the event loop with running loads.
    @app.post("/api/session/region", status_code=202)
    async def select_region(req: RegionRequest, request: Request):
        try:
            _start_load(request.app, req.region)
        except UnknownRegionError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return request.app.state.session.snapshot()

    @app.get("/api/session")
    async def session_state(request: Request):
        return request.app.state.session.snapshot()

    @app.post("/api/session/guess")
    async def guess(req: GuessRequest, request: Request):
        session: QuizSession = request.app.state.session
        try:
            outcome = session.submit_guess(req.slot_index, req.text)
        except SessionStateError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except IndexError:
            raise HTTPException(status_code=404, detail="Slot not found")

        slot = session.slots[req.slot_index]
        revealed = outcome.verdict in (Verdict.CORRECT, Verdict.LOCKED)
        return {
            "verdict": outcome.verdict.value,
            "similarity": round(outcome.similarity, 3),
            "name": slot.record.name if revealed else None,
            "state": session.state.value,
            "completion": session.completion,
            **session.progress(),
        }

    @app.post("/api/session/reset", status_code=202)
    async def reset(request: Request):
        session: QuizSession = request.app.state.session
        if session.region_key is None:
            await session.reset()
        else:
            _start_load(request.app, session.region_key)
        return session.snapshot()

    return app


app = create_app()
