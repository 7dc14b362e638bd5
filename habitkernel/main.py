import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from habitkernel.config import settings
from habitkernel.state import get_registry
from habitkernel.tracker.router import router as habits_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Hydrate from storage before the first request
    get_registry()
    yield


app = FastAPI(title="HabitKernel", version="0.1.0", lifespan=lifespan)
app.include_router(habits_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "habits": {
            "list": "/habits",
            "detail": "/habits/{id}",
            "toggle": "/habits/{id}/toggle?date=YYYY-MM-DD",
            "days": "/habits/days",
            "stats": "/habits/stats",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
