import asyncio
import json
import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from pydantic import ValidationError

from portfolio_api.config import GITHUB_ACCEPT, USER_AGENT, PER_PAGE, SORT_ORDER, REQUEST_TIMEOUT, Settings
from portfolio_api.schemas import RepositoryRecord

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    pass


class FetchError(GitHubAPIError):
    """Transport failure, timeout or non-success status from GitHub."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(GitHubAPIError):
    pass


def build_repos_url(owner: str) -> str:
    return f"/users/{owner}/repos"


def build_headers(token: str) -> dict[str, str]:
    headers = {
        "Accept": GITHUB_ACCEPT,
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"token {token}"
        logger.info("Using GitHub token for authentication")
    else:
        logger.info("No GitHub token found, using unauthenticated requests (rate limited)")
    return headers


@asynccontextmanager
async def create_client(settings: Settings) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create an httpx async client configured for the GitHub API."""
    async with httpx.AsyncClient(
        base_url=settings.api_base,
        headers=build_headers(settings.token),
        timeout=settings.timeout,
    ) as client:
        yield client


def decode_repos(body: bytes) -> list[RepositoryRecord]:
    """Decode a GitHub repository listing.

    The envelope is strict: the body must be a JSON array of objects.
    Individual fields are lenient and fall back to zero values, and a
    ``null`` element decodes to an all-zero record.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"failed to decode JSON: {exc}") from exc

    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array, got {type(data).__name__}")

    repos: list[RepositoryRecord] = []
    for index, entry in enumerate(data):
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise DecodeError(f"expected an object at index {index}, got {type(entry).__name__}")
        try:
            repos.append(RepositoryRecord.model_validate(entry))
        except ValidationError as exc:
            raise DecodeError(f"invalid repository at index {index}: {exc}") from exc
    return repos


async def fetch_repos(
    owner: str,
    client: httpx.AsyncClient,
    timeout: float = REQUEST_TIMEOUT,
) -> list[RepositoryRecord]:
    """Fetch one page of the owner's repositories, most recently updated first.

    ``timeout`` bounds the whole call, body included; the client's own
    timeout only bounds each connect/read/write step.
    Repositories past the first PER_PAGE entries are not returned.
    """
    if not owner:
        raise ValueError("owner must be a non-empty string")

    url = build_repos_url(owner)
    params = {"sort": SORT_ORDER, "per_page": str(PER_PAGE)}
    logger.debug(f"GET {url} {params}")

    try:
        response = await asyncio.wait_for(client.get(url, params=params), timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise FetchError(f"request to GitHub timed out after {timeout}s") from exc
    except httpx.TimeoutException as exc:
        raise FetchError(f"request to GitHub timed out: {exc}") from exc
    except httpx.RequestError as exc:
        raise FetchError(f"failed to fetch repositories: {exc}") from exc

    if response.status_code != 200:
        body = response.text
        logger.warning(f"GitHub API response: {body}")
        raise FetchError(
            f"GitHub API returned status: {response.status_code}, body: {body}",
            status_code=response.status_code,
            body=body,
        )

    return decode_repos(response.content)
