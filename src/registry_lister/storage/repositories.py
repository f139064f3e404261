"""List the repositories hosted on a registry."""

from __future__ import annotations

from ..models.documents import CatalogPage, HubPage
from ..models.registry import Registry, Repository
from .auth import PrivateRegistry, PublicHub, endpoint_for
from .lister import PagedLister


class RepositoryLister(PagedLister):
    """Enumerate repository names, following pagination to the end.

    On Docker Hub there is no catalog, so this lists the repositories in
    the namespace of the authenticated user.
    """

    def list(self, registry: Registry) -> list[Repository]:
        match endpoint_for(registry.name):
            case PublicHub() as hub:
                repositories = self._list_hub(registry, hub.base_url)
            case PrivateRegistry() as private:
                repositories = self._list_catalog(registry, private.base_url)
        self._logger.debug(
            f"Found {len(repositories)} repositories at {registry.name}"
        )
        return repositories

    def _list_hub(self, registry: Registry, base_url: str) -> list[Repository]:
        repositories: list[Repository] = []
        next_page: str | None = (
            f"{base_url}/v2/repositories/{registry.username}/"
        )
        params: dict[str, str | int] | None = {"page_size": self._page_size}
        count = 0
        while next_page:
            count += 1
            self._logger.debug(f"Requesting repositories: page {count}")
            r = self._get(registry, next_page, params)
            page = self._decode(r, HubPage)
            for res in page.results:
                namespace = res.namespace or str(registry.username)
                repositories.append(Repository(f"{namespace}/{res.name}"))
            # The "next" URL already carries the query parameters.
            next_page = page.next
            params = None
        return repositories

    def _list_catalog(
        self, registry: Registry, base_url: str
    ) -> list[Repository]:
        repositories: list[Repository] = []
        next_page: str | None = f"{base_url}/v2/_catalog"
        params: dict[str, str | int] | None = {"n": self._page_size}
        count = 0
        while next_page:
            count += 1
            self._logger.debug(f"Requesting catalog: page {count}")
            r = self._get(registry, next_page, params)
            page = self._decode(r, CatalogPage)
            repositories.extend(Repository(x) for x in page.repositories or [])
            next_page = self._next_link(r)
            params = None
        return repositories
