"""Shared request and pagination handling for registry listers."""

from typing import TypeVar

import httpx
import pydantic
from structlog.stdlib import BoundLogger

from ..exceptions import (
    AuthError,
    DecodeError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from ..models.registry import Registry
from .auth import set_auth

DEFAULT_PAGE_SIZE = 100

T = TypeVar("T", bound=pydantic.BaseModel)


class PagedLister:
    """Issue authenticated GETs against a registry and walk its pages.

    Pages are fetched strictly one after another: the URL of each page
    comes from the response to the previous one.

    Parameters
    ----------
    http_client
        Client used for every request, including Docker Hub logins.
    logger
        Logger to use for messages.
    page_size
        Number of entries to ask for on each page.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        logger: BoundLogger,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._http_client = http_client
        self._logger = logger
        self._page_size = page_size

    def _get(
        self,
        registry: Registry,
        url: str,
        params: dict[str, str | int] | None = None,
        *,
        not_found: bool = False,
    ) -> httpx.Response:
        """GET one page.  If ``not_found`` is set, a 404 raises
        ``NotFoundError`` instead of ``AuthError``.
        """
        try:
            request = self._http_client.build_request(
                "GET", url, params=params
            )
        except httpx.InvalidURL as exc:
            raise ValidationError(f"invalid registry URL {url}") from exc
        set_auth(registry, request, self._http_client)
        try:
            r = self._http_client.send(request)
        except httpx.TransportError as exc:
            raise NetworkError(f"GET {request.url} failed") from exc
        if not_found and r.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"GET {request.url}: not found")
        if not r.is_success:
            raise AuthError(
                f"GET {request.url}: status code {r.status_code} != 2xx"
            )
        return r

    def _decode(self, r: httpx.Response, model: type[T]) -> T:
        try:
            return model.model_validate_json(r.content)
        except pydantic.ValidationError as exc:
            raise DecodeError(
                f"decode response from {r.request.url} failed"
            ) from exc

    def _next_link(self, r: httpx.Response) -> str | None:
        """Follow a ``Link: <...>; rel="next"`` header, if any.

        The registry API returns a relative link, so resolve it against
        the URL of the request that produced it.
        """
        link = r.links.get("next")
        if not link or not link.get("url"):
            return None
        try:
            return str(r.request.url.join(link["url"]))
        except httpx.InvalidURL as exc:
            raise DecodeError(f"bad next link {link['url']}") from exc
