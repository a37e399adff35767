import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamestore.api import (
    cart_router,
    customers_router,
    games_router,
    health_router,
    purchases_router,
)
from gamestore.config import settings
from gamestore.db.database import async_session_factory, init_db
from gamestore.jobs.seed_catalog import seed_catalog
from gamestore.models.failure import KnownError, RefusalError, create_unknown_failure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    if settings.seed_sample_catalog:
        async with async_session_factory() as session:
            await seed_catalog(session)
            await session.commit()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("gamestore"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    logger.info("KNOWN_FAILURE kind=%s message=%s", exc.kind.value, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(RefusalError)
async def refusal_handler(_request: Request, exc: RefusalError) -> JSONResponse:
    logger.info("REFUSAL kind=%s message=%s", exc.kind.value, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("UNKNOWN_FAILURE error=%s", exc)
    return JSONResponse(
        status_code=500,
        content=create_unknown_failure(exc).model_dump(mode="json"),
    )


app.include_router(games_router)
app.include_router(customers_router)
app.include_router(cart_router)
app.include_router(purchases_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
