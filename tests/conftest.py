"""Test fixtures for the registry lister."""

import base64
import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TypeAlias

import httpx
import pytest
import structlog

from registry_lister.factory import Factory
from registry_lister.models.registry import Registry

Responder: TypeAlias = httpx.Response | Callable[[httpx.Request], httpx.Response]


class MockRegistry:
    """Serve canned responses keyed by method and full URL, and record
    every request received.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, response: Responder) -> None:
        self.routes[(method, url)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(599, text=f"no route for {request.url}")
        if callable(route):
            return route(request)
        # Hand out a fresh copy, since a route may be hit more than once.
        return httpx.Response(
            route.status_code, headers=route.headers, content=route.content
        )

    def add_hub_login(self, token: str = "tok3n") -> None:
        self.add(
            "POST",
            "https://hub.docker.com/v2/users/login/",
            httpx.Response(200, json={"token": token}),
        )

    def requests_to(self, method: str) -> list[httpx.Request]:
        return [x for x in self.requests if x.method == method]


@pytest.fixture
def mock_registry() -> MockRegistry:
    """Canned registry responses."""
    return MockRegistry()


@pytest.fixture
def http_client(mock_registry: MockRegistry) -> Iterator[httpx.Client]:
    """HTTP client talking to the mock registry."""
    with httpx.Client(
        transport=httpx.MockTransport(mock_registry.handler),
        follow_redirects=True,
    ) as client:
        yield client


@pytest.fixture
def factory(http_client: httpx.Client) -> Factory:
    """Factory whose listers ask for two entries per page."""
    return Factory(structlog.get_logger(__name__), http_client, page_size=2)


@pytest.fixture
def private_registry() -> Registry:
    """Private registry with basic-auth credentials."""
    return Registry(
        name="registry.example.com", username="alice", password="s3cr3t"
    )


@pytest.fixture
def hub_registry() -> Registry:
    """Docker Hub with login credentials."""
    return Registry(name="docker.io", username="alice", password="s3cr3t")


def make_docker_config(auths: dict[str, str]) -> str:
    """Docker config document with the given ``user:pass`` auths."""
    return json.dumps(
        {
            "auths": {
                domain: {"auth": base64.b64encode(value.encode()).decode()}
                for domain, value in auths.items()
            }
        }
    )


@pytest.fixture
def docker_config_file(tmp_path: Path) -> Path:
    """Docker config file with entries for the hub and a private
    registry.
    """
    path = tmp_path / "config.json"
    path.write_text(
        make_docker_config(
            {
                "https://index.docker.io/v1/": "hubuser:hubpass",
                "registry.example.com": "bob:pa:ss",
            }
        )
    )
    return path


@pytest.fixture
def docker_config() -> Callable[[dict[str, str]], str]:
    """Build a Docker config document from a map of domain to
    ``user:pass``.
    """
    return make_docker_config
