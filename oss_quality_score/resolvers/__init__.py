"""
Resolver registry for turning input URLs into repository identities.
"""

from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.resolvers.base import UrlResolver
from oss_quality_score.resolvers.github import GitHubUrlResolver
from oss_quality_score.resolvers.npm import NpmUrlResolver

# Global registry of resolvers
_RESOLVERS: list[UrlResolver] = []


def _initialize_resolvers() -> None:
    """Initialize all registered resolvers."""
    if not _RESOLVERS:
        _RESOLVERS.append(GitHubUrlResolver())
        _RESOLVERS.append(NpmUrlResolver())


def get_resolver(url: str) -> UrlResolver | None:
    """
    Get the resolver that handles the given URL.

    Args:
        url: Repository or package page URL.

    Returns:
        UrlResolver instance or None if no resolver accepts the host.
    """
    _initialize_resolvers()
    for resolver in _RESOLVERS:
        if resolver.can_handle(url):
            return resolver
    return None


def register_resolver(resolver: UrlResolver) -> None:
    """Register an additional resolver (checked after the builtin ones)."""
    _initialize_resolvers()
    _RESOLVERS.append(resolver)


def resolve_repository(url: str) -> RepositoryIdentity:
    """
    Resolve a GitHub or npm URL to a GitHub repository identity.

    Raises:
        ValueError: If the URL is unsupported or names no GitHub repository.
        httpx.HTTPError: If a registry lookup fails.
    """
    if not url or not url.strip():
        raise ValueError("A repository URL is required.")

    resolver = get_resolver(url)
    if resolver is None:
        raise ValueError(
            f"Unsupported URL: {url}. Provide a github.com or npmjs.com URL."
        )

    identity = resolver.resolve(url)
    if identity is None:
        raise ValueError(f"No GitHub repository found for {url}.")
    return identity


__all__ = [
    "GitHubUrlResolver",
    "NpmUrlResolver",
    "UrlResolver",
    "get_resolver",
    "register_resolver",
    "resolve_repository",
]
