"""Tests for registry request authentication."""

import base64
import json

import httpx
import pytest
from conftest import MockRegistry

from registry_lister.exceptions import AuthError, DecodeError, NetworkError
from registry_lister.models.registry import Registry
from registry_lister.storage.auth import (
    PrivateRegistry,
    PublicHub,
    endpoint_for,
    get_token,
    set_auth,
)

LOGIN_URL = "https://hub.docker.com/v2/users/login/"


def test_endpoint_for() -> None:
    assert endpoint_for("docker.io") == PublicHub()
    assert endpoint_for("docker.io").base_url == "https://hub.docker.com"
    private = endpoint_for("registry.example.com")
    assert private == PrivateRegistry(host="registry.example.com")
    assert private.base_url == "https://registry.example.com"


def test_get_token(
    hub_registry: Registry,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    mock_registry.add_hub_login("tok3n")
    token = get_token(hub_registry, http_client)
    assert token == "tok3n"
    assert hub_registry.token == ""
    (login,) = mock_registry.requests
    assert str(login.url) == LOGIN_URL
    assert login.headers["Content-Type"] == "application/json"
    assert json.loads(login.content) == {
        "username": "alice",
        "password": "s3cr3t",
    }


@pytest.mark.parametrize("status", [301, 400, 401, 403, 500])
def test_get_token_bad_status(
    status: int,
    hub_registry: Registry,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    """A parseable body does not rescue a non-2xx status."""
    mock_registry.add(
        "POST", LOGIN_URL, httpx.Response(status, json={"token": "tok3n"})
    )
    with pytest.raises(AuthError):
        get_token(hub_registry, http_client)


@pytest.mark.parametrize(
    "body", [b"not json", b"{}", b'{"token": 17}', b'{"jwt": "x"}']
)
def test_get_token_bad_body(
    body: bytes,
    hub_registry: Registry,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    mock_registry.add("POST", LOGIN_URL, httpx.Response(200, content=body))
    with pytest.raises(DecodeError):
        get_token(hub_registry, http_client)


def test_get_token_network_error(
    hub_registry: Registry,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    mock_registry.add("POST", LOGIN_URL, refuse)
    with pytest.raises(NetworkError):
        get_token(hub_registry, http_client)


def test_set_auth_basic(
    private_registry: Registry,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    request = http_client.build_request(
        "GET", "https://registry.example.com/v2/_catalog"
    )
    set_auth(private_registry, request, http_client)
    expected = base64.b64encode(b"alice:s3cr3t").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert mock_registry.requests == []


@pytest.mark.parametrize(
    ("username", "password"), [("", ""), ("alice", ""), ("", "s3cr3t")]
)
def test_set_auth_anonymous(
    username: str,
    password: str,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    registry = Registry(
        name="registry.example.com", username=username, password=password
    )
    request = http_client.build_request(
        "GET", "https://registry.example.com/v2/_catalog"
    )
    set_auth(registry, request, http_client)
    assert "Authorization" not in request.headers
    assert mock_registry.requests == []


@pytest.mark.parametrize(
    ("username", "password"), [("alice", "s3cr3t"), ("", "")]
)
def test_set_auth_hub(
    username: str,
    password: str,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    """The hub always logs in, even with empty credentials."""
    mock_registry.add_hub_login("tok3n")
    registry = Registry(name="docker.io", username=username, password=password)
    request = http_client.build_request(
        "GET", "https://hub.docker.com/v2/repositories/alice/"
    )
    set_auth(registry, request, http_client)
    assert request.headers["Authorization"] == "JWT tok3n"
    assert len(mock_registry.requests_to("POST")) == 1


def test_set_auth_hub_login_failure(
    hub_registry: Registry,
    mock_registry: MockRegistry,
    http_client: httpx.Client,
) -> None:
    mock_registry.add("POST", LOGIN_URL, httpx.Response(401))
    request = http_client.build_request(
        "GET", "https://hub.docker.com/v2/repositories/alice/"
    )
    with pytest.raises(AuthError):
        set_auth(hub_registry, request, http_client)
    assert "Authorization" not in request.headers


def test_set_auth_basic_password_with_colon(
    mock_registry: MockRegistry, http_client: httpx.Client
) -> None:
    registry = Registry(
        name="registry.example.com", username="bob", password="pa:ss"
    )
    request = http_client.build_request(
        "GET", "https://registry.example.com/v2/_catalog"
    )
    set_auth(registry, request, http_client)
    scheme, _, value = request.headers["Authorization"].partition(" ")
    assert scheme == "Basic"
    assert base64.b64decode(value) == b"bob:pa:ss"
