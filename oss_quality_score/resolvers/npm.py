"""
npm package URL resolver.
"""

from urllib.parse import quote, unquote, urlparse

from oss_quality_score.http_client import _get_http_client
from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.resolvers.base import UrlResolver
from oss_quality_score.resolvers.github import parse_github_url

NPM_REGISTRY_URL = "https://registry.npmjs.org"


def package_name_from_url(url: str) -> str | None:
    """
    Extract the package name from an npmjs.com package page URL.

    Args:
        url: e.g. 'https://www.npmjs.com/package/express' or
             'https://www.npmjs.com/package/@types/node/v/20.0.0'

    Returns:
        Package name (scoped names keep their '@scope/' prefix) or None.
    """
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    parts = [unquote(p) for p in urlparse(candidate).path.split("/") if p]

    if len(parts) < 2 or parts[0] != "package":
        return None
    if parts[1].startswith("@"):
        if len(parts) < 3:
            return None
        return f"{parts[1]}/{parts[2]}"
    return parts[1]


class NpmUrlResolver(UrlResolver):
    """Resolver for npmjs.com package pages via the npm registry."""

    @property
    def host_names(self) -> tuple[str, ...]:
        return ("npmjs.com",)

    def resolve(self, url: str) -> RepositoryIdentity | None:
        """
        Look up the package in the npm registry and follow its repository field.

        Raises:
            httpx.HTTPError: If the registry request fails.
        """
        package_name = package_name_from_url(url)
        if not package_name:
            return None

        client = _get_http_client()
        response = client.get(
            f"{NPM_REGISTRY_URL}/{quote(package_name, safe='@')}", timeout=10
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        data = response.json()

        repository = data.get("repository")
        if isinstance(repository, dict):
            repo_url = repository.get("url", "")
        elif isinstance(repository, str):
            # Shorthand form: "github:owner/repo" or "owner/repo"
            repo_url = repository
            if repo_url.startswith("github:"):
                repo_url = f"https://github.com/{repo_url.removeprefix('github:')}"
            elif ":" not in repo_url and repo_url.count("/") == 1:
                repo_url = f"https://github.com/{repo_url}"
        else:
            repo_url = ""

        if not repo_url:
            return None
        return parse_github_url(repo_url)
