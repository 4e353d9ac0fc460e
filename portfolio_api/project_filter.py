import logging
from typing import Callable, Iterable, Sequence

from portfolio_api.schemas import RepositoryRecord

logger = logging.getLogger(__name__)

ExclusionRule = Callable[[str, RepositoryRecord], bool]


def is_site_repo(owner: str, repo: RepositoryRecord) -> bool:
    """The <owner>.github.io repo hosts the portfolio itself."""
    return repo.name == f"{owner}.github.io"


DEFAULT_EXCLUSION_RULES: tuple[ExclusionRule, ...] = (is_site_repo,)


def filter_projects(
    owner: str,
    repos: Iterable[RepositoryRecord],
    rules: Sequence[ExclusionRule] = DEFAULT_EXCLUSION_RULES,
) -> list[RepositoryRecord]:
    """Return repos not matched by any exclusion rule, in their original order."""
    kept: list[RepositoryRecord] = []
    for repo in repos:
        if any(rule(owner, repo) for rule in rules):
            logger.debug(f"Excluding {repo.name}")
            continue
        kept.append(repo)
    return kept
