"""
Base class for URL resolvers.
"""

from abc import ABC, abstractmethod
from urllib.parse import urlparse

from oss_quality_score.repository import RepositoryIdentity


class UrlResolver(ABC):
    """Turns a user-supplied URL into a GitHub repository identity."""

    @property
    @abstractmethod
    def host_names(self) -> tuple[str, ...]:
        """Hosts this resolver accepts (without 'www.')."""

    def can_handle(self, url: str) -> bool:
        """Return True if the URL's host belongs to this resolver."""
        return _host_of(url) in self.host_names

    @abstractmethod
    def resolve(self, url: str) -> RepositoryIdentity | None:
        """
        Resolve the URL.

        Args:
            url: Repository or package page URL.

        Returns:
            RepositoryIdentity, or None if the URL does not name a repository.
        """


def _host_of(url: str) -> str:
    """Lower-cased host of a URL, tolerating missing schemes and 'www.'."""
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    host = (urlparse(candidate).hostname or "").lower()
    return host.removeprefix("www.")
