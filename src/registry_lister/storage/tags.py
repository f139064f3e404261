"""List the tags of one repository."""

from __future__ import annotations

from ..models.documents import HubPage, TagsPage
from ..models.registry import Registry, Tag
from .auth import PrivateRegistry, PublicHub, endpoint_for
from .lister import PagedLister


class TagLister(PagedLister):
    """Enumerate tag names for a repository, following pagination to the
    end.  A repository the registry does not know raises ``NotFoundError``.
    """

    def list(self, registry: Registry, repository: str) -> list[Tag]:
        match endpoint_for(registry.name):
            case PublicHub() as hub:
                url = f"{hub.base_url}/v2/repositories/{repository}/tags/"
                tags = self._list_hub(registry, url)
            case PrivateRegistry() as private:
                url = f"{private.base_url}/v2/{repository}/tags/list"
                tags = self._list_registry(registry, url)
        self._logger.debug(f"Found {len(tags)} tags for {repository}")
        return tags

    def _list_hub(self, registry: Registry, url: str) -> list[Tag]:
        tags: list[Tag] = []
        next_page: str | None = url
        params: dict[str, str | int] | None = {"page_size": self._page_size}
        count = 0
        while next_page:
            count += 1
            self._logger.debug(f"Requesting tags: page {count}")
            r = self._get(registry, next_page, params, not_found=True)
            page = self._decode(r, HubPage)
            tags.extend(Tag(x.name) for x in page.results)
            next_page = page.next
            params = None
        return tags

    def _list_registry(self, registry: Registry, url: str) -> list[Tag]:
        tags: list[Tag] = []
        next_page: str | None = url
        params: dict[str, str | int] | None = {"n": self._page_size}
        count = 0
        while next_page:
            count += 1
            self._logger.debug(f"Requesting tags: page {count}")
            r = self._get(registry, next_page, params, not_found=True)
            page = self._decode(r, TagsPage)
            # A repository with no tags reports "tags": null.
            tags.extend(Tag(x) for x in page.tags or [])
            next_page = self._next_link(r)
            params = None
        return tags
