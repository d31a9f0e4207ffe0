"""Repository identity shared by resolvers, transports and metrics."""

from typing import NamedTuple


class RepositoryIdentity(NamedTuple):
    """Owner/name pair of a GitHub repository."""

    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.name}.git"
