"""
Base transport contract and response records for VCS providers.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, NamedTuple


class GraphQLQueryError(Exception):
    """The platform accepted the request but reported query errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class LicenseInfo(NamedTuple):
    """License metadata and raw LICENSE text of a repository."""

    spdx_id: str | None = None
    name: str | None = None
    raw_text: str | None = None


class ItemTimestamps(NamedTuple):
    """Creation and resolution timestamps of an issue or pull request."""

    created_at: datetime | None
    closed_at: datetime | None = None
    merged_at: datetime | None = None


class IssueStats(NamedTuple):
    """Issue counts and, when sampled, per-issue timestamps."""

    open_count: int = 0
    closed_count: int = 0
    items: list[ItemTimestamps] = []


class PullRequestStats(NamedTuple):
    """Pull request counts and, when sampled, per-PR timestamps."""

    open_count: int = 0
    closed_count: int = 0
    merged_count: int = 0
    items: list[ItemTimestamps] = []


class CorrectnessData(NamedTuple):
    """Counts backing the correctness metric."""

    issues: IssueStats
    pull_requests: PullRequestStats
    release_count: int = 0
    recent_commit_count: int = 0


class ResponsivenessData(NamedTuple):
    """Recent pull requests and issues backing the responsiveness metric."""

    pull_requests: PullRequestStats
    issues: IssueStats


class BaseVCSProvider(ABC):
    """Query transport interface used by the metric calculators."""

    @abstractmethod
    def get_license_info(
        self, owner: str, repo: str, expressions: tuple[str, ...]
    ) -> LicenseInfo | None:
        """
        Fetch license metadata plus the LICENSE blob text.

        Args:
            owner: Repository owner
            repo: Repository name
            expressions: Object expressions (e.g. 'main:LICENSE') tried in order

        Returns:
            LicenseInfo, or None if the platform reports no license at all
        """

    @abstractmethod
    def get_correctness_data(
        self, owner: str, repo: str, since: datetime
    ) -> CorrectnessData:
        """Fetch issue, pull request, release and recent commit counts."""

    @abstractmethod
    def get_responsiveness_data(
        self, owner: str, repo: str, sample_size: int
    ) -> ResponsivenessData:
        """Fetch timestamps of the most recent pull requests and issues."""
