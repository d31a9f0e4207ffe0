"""
VCS (Version Control System) query transport layer for OSS Quality Score.

This module exposes the transport contract used by the metric calculators and
the GitHub implementation backing it.
"""

from oss_quality_score.vcs.base import BaseVCSProvider, GraphQLQueryError
from oss_quality_score.vcs.github import GitHubProvider

__all__ = [
    "BaseVCSProvider",
    "GraphQLQueryError",
    "GitHubProvider",
    "get_vcs_provider",
]

# Registry of supported VCS providers
_PROVIDERS: dict[str, type[BaseVCSProvider]] = {
    "github": GitHubProvider,
}


def get_vcs_provider(platform: str = "github", **kwargs) -> BaseVCSProvider:
    """
    Factory function to get VCS provider instance.

    Args:
        platform: VCS platform name. Default: 'github'
        **kwargs: Provider-specific configuration (e.g., token)

    Returns:
        Initialized VCS provider instance

    Raises:
        ValueError: If platform is not supported
    """
    platform_lower = platform.lower()

    if platform_lower not in _PROVIDERS:
        supported = ", ".join(sorted(_PROVIDERS.keys()))
        raise ValueError(
            f"Unsupported VCS platform: {platform}. Supported platforms: {supported}"
        )

    return _PROVIDERS[platform_lower](**kwargs)
