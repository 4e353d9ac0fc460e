from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_int(value: Any) -> int:
    # bool is an int subclass but never a valid count or id
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class RepositoryRecord(BaseModel):
    """One upstream repository, reduced to the fields the portfolio shows.

    Missing, null or mistyped fields fall back to their zero value so one
    odd record never fails the whole listing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = 0
    name: str = ""
    full_name: str = ""
    description: str = ""
    html_url: str = ""
    language: str = ""
    stargazers_count: int = Field(default=0, ge=0)
    forks_count: int = Field(default=0, ge=0)
    created_at: str = ""
    updated_at: str = ""
    topics: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> int:
        return _as_int(value)

    @field_validator("stargazers_count", "forks_count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return max(_as_int(value), 0)

    @field_validator(
        "name",
        "full_name",
        "description",
        "html_url",
        "language",
        "created_at",
        "updated_at",
        mode="before",
    )
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return _as_str(value)

    @field_validator("topics", mode="before")
    @classmethod
    def _coerce_topics(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [topic for topic in value if isinstance(topic, str)]


class ProjectListResponse(BaseModel):
    projects: list[RepositoryRecord]
    lastUpdated: str


class HealthStatus(BaseModel):
    status: str = "healthy"
    time: str
