"""Component factory."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import closing, contextmanager
from typing import Self

import httpx
import structlog
from structlog.stdlib import BoundLogger

from .config import ListerConfig
from .storage.lister import DEFAULT_PAGE_SIZE
from .storage.repositories import RepositoryLister
from .storage.tags import TagLister


def build_http_client(timeout: float = 30.0) -> httpx.Client:
    """HTTP client that ignores any proxy configured in the environment
    and follows redirects.
    """
    return httpx.Client(
        trust_env=False, timeout=timeout, follow_redirects=True
    )


class Factory:
    """Build registry listers that share one HTTP client.

    Parameters
    ----------
    logger
        Logger to use for messages.
    http_client
        Client shared by every lister this factory builds.
    page_size
        Number of entries to request per page.
    """

    @classmethod
    @contextmanager
    def standalone(cls, config: ListerConfig) -> Iterator[Self]:
        """Context manager for lister components.

        Parameters
        ----------
        config
            Lister configuration.

        Yields
        ------
        Factory
            Newly-created factory.  Its HTTP client is closed on exit.
        """
        logger = structlog.get_logger(__name__)
        http_client = build_http_client(config.timeout)
        factory = cls(logger, http_client, page_size=config.page_size)
        with closing(factory):
            yield factory

    def __init__(
        self,
        logger: BoundLogger,
        http_client: httpx.Client,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._logger = logger
        self._http_client = http_client
        self._page_size = page_size

    def close(self) -> None:
        self._http_client.close()

    def repositories(self) -> RepositoryLister:
        return RepositoryLister(
            self._http_client, self._logger, page_size=self._page_size
        )

    def tags(self) -> TagLister:
        return TagLister(
            self._http_client, self._logger, page_size=self._page_size
        )
