"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yearbook.api.errors import register_exception_handlers
from yearbook.api.v1 import router as v1_router
from yearbook.core.config import settings
from yearbook.core.database import SessionLocal
from yearbook.services.montage_queue import ThreadPoolMontageQueue, url_renderer

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.montage_queue = ThreadPoolMontageQueue(
        SessionLocal,
        url_renderer(settings.MONTAGE_OUTPUT_BASE_URL),
        max_workers=settings.MONTAGE_WORKERS,
    )
    yield
    app.state.montage_queue.shutdown()


app = FastAPI(
    title="Yearbook API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Yearbook API"}
