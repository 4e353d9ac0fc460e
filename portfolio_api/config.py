import os
import logging

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

# --- GitHub ---
GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "")
GITHUB_OWNER: str = os.getenv("GITHUB_OWNER", "jasonschurawel")
GITHUB_API_BASE: str = os.getenv("GITHUB_API_BASE", "https://api.github.com")
GITHUB_ACCEPT: str = "application/vnd.github.v3+json"
USER_AGENT: str = "GitHub-Portfolio-API/1.0"

# --- Listing ---
PER_PAGE: int = 100  # single page, no pagination beyond this
SORT_ORDER: str = "updated"

# --- Server ---
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8080"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info").upper()

# --- Timeouts ---
REQUEST_TIMEOUT: float = 10.0  # whole upstream call (seconds)


class Settings(BaseModel):
    """Read-only runtime configuration handed to handlers and the client."""

    model_config = ConfigDict(frozen=True)

    owner: str
    token: str = ""
    api_base: str = GITHUB_API_BASE
    timeout: float = REQUEST_TIMEOUT


_settings = Settings(
    owner=GITHUB_OWNER,
    token=GITHUB_TOKEN,
    api_base=GITHUB_API_BASE,
    timeout=REQUEST_TIMEOUT,
)


def get_settings() -> Settings:
    return _settings


def configure_logging() -> None:
    level = getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
