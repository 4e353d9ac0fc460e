import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from portfolio_api.config import configure_logging, get_settings, Settings, HOST, PORT
from portfolio_api.cors import cors_middleware
from portfolio_api.schemas import HealthStatus, ProjectListResponse
from portfolio_api.github_client import (
    create_client,
    fetch_repos,
    FetchError,
    DecodeError,
)
from portfolio_api.project_filter import filter_projects

configure_logging()
logger = logging.getLogger(__name__)


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("GitHub Portfolio API starting up")
    logger.info(f"Listing repositories for {settings.owner}")
    logger.info(f"API endpoints: GET /api/projects, GET /api/health (port {PORT})")
    if settings.token:
        logger.info(f"GitHub token available (length: {len(settings.token)})")
    else:
        logger.warning("No GitHub token - using unauthenticated requests")
    yield
    logger.info("GitHub Portfolio API shutting down")


app = FastAPI(
    title="GitHub Portfolio API",
    description="Lists a GitHub user's repositories for a portfolio page",
    version="1.0.0",
    lifespan=lifespan,
)
app.middleware("http")(cors_middleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return PlainTextResponse("Internal server error", status_code=500)


async def get_github_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with create_client(settings) as client:
        yield client


@app.get("/api/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    return HealthStatus(status="healthy", time=_now_rfc3339())


@app.get("/api/projects", response_model=ProjectListResponse)
async def list_projects(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_github_client),
) -> Response:
    logger.info(f"Fetching repositories for user: {settings.owner}")

    try:
        repos = await fetch_repos(settings.owner, client, timeout=settings.timeout)
    except (FetchError, DecodeError, ValueError) as exc:
        logger.error(f"Error fetching repositories: {exc}")
        return PlainTextResponse(f"Error fetching repositories: {exc}", status_code=500)

    projects = filter_projects(settings.owner, repos)
    logger.info(f"Successfully fetched {len(projects)} repositories")

    try:
        payload = ProjectListResponse(projects=projects, lastUpdated=_now_rfc3339())
        return JSONResponse(content=payload.model_dump(mode="json"))
    except (TypeError, ValueError) as exc:
        logger.error(f"Error encoding response: {exc}")
        return PlainTextResponse("Error encoding response", status_code=500)


def run() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
