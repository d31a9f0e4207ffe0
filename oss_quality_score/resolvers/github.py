"""
GitHub URL resolver.
"""

import re

from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.resolvers.base import UrlResolver

# Matches https, git+https, git:// and scp-like ssh forms
_GITHUB_PATTERN = re.compile(
    r"github\.com[/:](?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+)"
)


def parse_github_url(url: str) -> RepositoryIdentity | None:
    """
    Extract owner and repository name from any GitHub URL form.

    Args:
        url: e.g. 'https://github.com/owner/repo/tree/main',
             'git+https://github.com/owner/repo.git', 'git@github.com:owner/repo'

    Returns:
        RepositoryIdentity, or None if the URL does not point at a repository.
    """
    match = _GITHUB_PATTERN.search(url.strip())
    if not match:
        return None

    owner = match.group("owner")
    name = match.group("name").removesuffix(".git")
    if not owner or not name:
        return None
    return RepositoryIdentity(owner=owner, name=name)


class GitHubUrlResolver(UrlResolver):
    """Resolver for github.com URLs (parsed locally, no network)."""

    @property
    def host_names(self) -> tuple[str, ...]:
        return ("github.com",)

    def can_handle(self, url: str) -> bool:
        # scp-like ssh URLs have no scheme host to parse
        return super().can_handle(url) or url.strip().startswith("git@github.com:")

    def resolve(self, url: str) -> RepositoryIdentity | None:
        return parse_github_url(url)
