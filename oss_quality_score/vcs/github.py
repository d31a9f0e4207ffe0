"""
GitHub VCS provider implementation for OSS Quality Score.

This module implements the query transport using the GitHub GraphQL API.
Each metric issues its own query so that one failing metric never affects
the data of another.
"""

from datetime import datetime
from typing import Any

from oss_quality_score.config import get_github_token
from oss_quality_score.http_client import _get_http_client
from oss_quality_score.vcs.base import (
    BaseVCSProvider,
    CorrectnessData,
    GraphQLQueryError,
    IssueStats,
    ItemTimestamps,
    LicenseInfo,
    PullRequestStats,
    ResponsivenessData,
)

# GitHub API endpoint
GITHUB_GRAPHQL_API = "https://api.github.com/graphql"

# GitHub rejects connection page sizes above 100
MAX_PAGE_SIZE = 100

CORRECTNESS_QUERY = """
query GetCorrectness($owner: String!, $name: String!, $since: GitTimestamp!) {
  repository(owner: $owner, name: $name) {
    issues(states: OPEN) {
      totalCount
    }
    closedIssues: issues(states: CLOSED) {
      totalCount
    }
    pullRequests(states: OPEN) {
      totalCount
    }
    releases {
      totalCount
    }
    defaultBranchRef {
      target {
        ... on Commit {
          history(since: $since) {
            totalCount
          }
        }
      }
    }
  }
}
"""

RESPONSIVENESS_QUERY = """
query GetResponsiveness($owner: String!, $name: String!, $first: Int!) {
  repository(owner: $owner, name: $name) {
    pullRequests(first: $first, states: [OPEN, MERGED, CLOSED], orderBy: {field: CREATED_AT, direction: DESC}) {
      edges {
        node {
          createdAt
          closedAt
          mergedAt
          state
        }
      }
    }
    issues(first: $first, states: [OPEN, CLOSED], orderBy: {field: CREATED_AT, direction: DESC}) {
      edges {
        node {
          createdAt
          closedAt
          state
        }
      }
    }
  }
}
"""


def _parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO 8601 timestamp ('2024-01-01T00:00:00Z')."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


def _total_count(connection: dict[str, Any] | None) -> int:
    if not connection:
        return 0
    return int(connection.get("totalCount") or 0)


def _edge_nodes(connection: dict[str, Any] | None) -> list[dict[str, Any]]:
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges") or [] if edge.get("node")]


class GitHubProvider(BaseVCSProvider):
    """GitHub query transport using the GraphQL API."""

    def __init__(self, token: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token. If not provided, reads from
                   GITHUB_TOKEN environment variable. A missing token is only
                   reported when a query is executed.
        """
        self.token = token or get_github_token()

    def validate_credentials(self) -> bool:
        """Check if GitHub token is configured."""
        return self.token is not None and len(self.token) > 0

    def get_license_info(
        self,
        owner: str,
        repo: str,
        expressions: tuple[str, ...] = ("main:LICENSE", "master:LICENSE"),
    ) -> LicenseInfo | None:
        """
        Fetch license metadata and LICENSE text from GitHub.

        Args:
            owner: GitHub repository owner (username or organization)
            repo: GitHub repository name
            expressions: Git object expressions for the LICENSE blob, tried in order

        Returns:
            LicenseInfo, or None when GitHub reports no license

        Raises:
            ValueError: If the token is missing or the repository is inaccessible
            GraphQLQueryError: If GitHub reports query errors
            httpx.HTTPError: On network or HTTP status failures
        """
        query = self._get_license_query(len(expressions))
        variables: dict[str, Any] = {"owner": owner, "name": repo}
        for index, expression in enumerate(expressions):
            variables[f"expression{index}"] = expression

        repo_info = self._query_repository(query, variables, owner, repo)

        license_data = repo_info.get("licenseInfo")
        if not license_data:
            return None

        raw_text = None
        for index in range(len(expressions)):
            blob = repo_info.get(f"license{index}")
            if blob and blob.get("text"):
                raw_text = blob["text"]
                break

        return LicenseInfo(
            spdx_id=license_data.get("spdxId"),
            name=license_data.get("name"),
            raw_text=raw_text,
        )

    def get_correctness_data(
        self, owner: str, repo: str, since: datetime
    ) -> CorrectnessData:
        """
        Fetch issue/PR/release totals and recent default-branch commits.

        Args:
            owner: GitHub repository owner
            repo: GitHub repository name
            since: Lower bound (inclusive) for counted commits

        Returns:
            CorrectnessData with totals only (no per-item samples)
        """
        variables = {"owner": owner, "name": repo, "since": since.isoformat()}
        repo_info = self._query_repository(CORRECTNESS_QUERY, variables, owner, repo)

        recent_commits = 0
        default_branch = repo_info.get("defaultBranchRef")
        if default_branch and default_branch.get("target"):
            recent_commits = _total_count(default_branch["target"].get("history"))

        return CorrectnessData(
            issues=IssueStats(
                open_count=_total_count(repo_info.get("issues")),
                closed_count=_total_count(repo_info.get("closedIssues")),
            ),
            pull_requests=PullRequestStats(
                open_count=_total_count(repo_info.get("pullRequests")),
            ),
            release_count=_total_count(repo_info.get("releases")),
            recent_commit_count=recent_commits,
        )

    def get_responsiveness_data(
        self, owner: str, repo: str, sample_size: int = MAX_PAGE_SIZE
    ) -> ResponsivenessData:
        """
        Fetch the most recent pull requests and issues with their timestamps.

        Args:
            owner: GitHub repository owner
            repo: GitHub repository name
            sample_size: Items per connection (clamped to 1..100)

        Returns:
            ResponsivenessData with per-item timestamps and state counts
        """
        first = max(1, min(sample_size, MAX_PAGE_SIZE))
        variables = {"owner": owner, "name": repo, "first": first}
        repo_info = self._query_repository(
            RESPONSIVENESS_QUERY, variables, owner, repo
        )

        pr_nodes = _edge_nodes(repo_info.get("pullRequests"))
        issue_nodes = _edge_nodes(repo_info.get("issues"))

        pull_requests = PullRequestStats(
            open_count=sum(1 for n in pr_nodes if n.get("state") == "OPEN"),
            closed_count=sum(1 for n in pr_nodes if n.get("state") == "CLOSED"),
            merged_count=sum(1 for n in pr_nodes if n.get("state") == "MERGED"),
            items=[
                ItemTimestamps(
                    created_at=_parse_timestamp(n.get("createdAt")),
                    closed_at=_parse_timestamp(n.get("closedAt")),
                    merged_at=_parse_timestamp(n.get("mergedAt")),
                )
                for n in pr_nodes
            ],
        )
        issues = IssueStats(
            open_count=sum(1 for n in issue_nodes if n.get("state") == "OPEN"),
            closed_count=sum(1 for n in issue_nodes if n.get("state") == "CLOSED"),
            items=[
                ItemTimestamps(
                    created_at=_parse_timestamp(n.get("createdAt")),
                    closed_at=_parse_timestamp(n.get("closedAt")),
                )
                for n in issue_nodes
            ],
        )
        return ResponsivenessData(pull_requests=pull_requests, issues=issues)

    def _query_repository(
        self, query: str, variables: dict[str, Any], owner: str, repo: str
    ) -> dict[str, Any]:
        """Run a repository query and return the 'repository' object."""
        raw_data = self._query_graphql(query, variables)

        if "repository" not in raw_data or raw_data["repository"] is None:
            raise ValueError(f"Repository {owner}/{repo} not found or is inaccessible.")

        return raw_data["repository"]

    def _query_graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Execute GraphQL query against GitHub API.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            Response data dictionary

        Raises:
            ValueError: If no GitHub token is configured
            GraphQLQueryError: If the response carries GraphQL errors
            httpx.HTTPStatusError: If API returns an error status
        """
        if not self.validate_credentials():
            raise ValueError(
                "GITHUB_TOKEN environment variable is required.\n"
                "\n"
                "To get started:\n"
                "1. Create a GitHub Personal Access Token (classic):\n"
                "   -> https://github.com/settings/tokens/new\n"
                "2. Select scopes: 'public_repo' (for public repositories)\n"
                "3. Set the token:\n"
                "   export GITHUB_TOKEN='your_token_here'  # Linux/macOS\n"
                "   or add to your .env file: GITHUB_TOKEN=your_token_here\n"
            )

        headers = {
            "Authorization": f"bearer {self.token}",
            "Content-Type": "application/json",
        }
        client = _get_http_client()
        response = client.post(
            GITHUB_GRAPHQL_API,
            json={"query": query, "variables": variables},
            headers=headers,
            timeout=30,
        )
        response.raise_for_status()
        data = response.json()

        if data.get("errors"):
            messages = "; ".join(
                str(error.get("message", error)) for error in data["errors"]
            )
            raise GraphQLQueryError(f"GitHub API Errors: {messages}", data["errors"])

        return data.get("data") or {}

    def _get_license_query(self, expression_count: int) -> str:
        """Return the license query with one blob alias per expression."""
        params = "".join(
            f", $expression{i}: String!" for i in range(expression_count)
        )
        blobs = "\n".join(
            f"""    license{i}: object(expression: $expression{i}) {{
      ... on Blob {{
        text
      }}
    }}"""
            for i in range(expression_count)
        )
        return f"""
query GetLicense($owner: String!, $name: String!{params}) {{
  repository(owner: $owner, name: $name) {{
    licenseInfo {{
      name
      spdxId
      url
    }}
{blobs}
  }}
}}
"""
