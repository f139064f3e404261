"""Authentication for registry API requests.

Docker Hub wants a JWT obtained from its login endpoint; everything else
gets HTTP basic auth, or nothing at all for anonymous reads.
"""

import base64
from dataclasses import dataclass
from typing import TypeAlias

import httpx
import pydantic
import structlog

from ..exceptions import AuthError, DecodeError, NetworkError, RegistryError
from ..models.documents import TokenResponse
from ..models.registry import HUB_URL, Registry, RegistryName, RegistryToken

logger = structlog.get_logger(__name__)


def get_token(registry: Registry, client: httpx.Client) -> RegistryToken:
    """Log in to Docker Hub and return a bearer token.

    The token is not stored anywhere; each call performs a fresh login.
    """
    url = f"{registry.name.url()}/v2/users/login/"
    auth = {
        "username": str(registry.username),
        "password": str(registry.password),
    }
    try:
        r = client.post(
            url, json=auth, headers={"Content-Type": "application/json"}
        )
    except httpx.TransportError as exc:
        raise NetworkError(f"POST {url} failed") from exc
    if not r.is_success:
        raise AuthError(f"login to {url}: status code {r.status_code} != 2xx")
    try:
        body = TokenResponse.model_validate_json(r.content)
    except pydantic.ValidationError as exc:
        raise DecodeError(f"decode response from {url} failed") from exc
    logger.debug(f"Got token for '{registry.username}'")
    return RegistryToken(body.token)


@dataclass(frozen=True)
class PublicHub:
    """Docker Hub.  Every request needs a fresh JWT from a login."""

    @property
    def base_url(self) -> str:
        return HUB_URL

    def authenticate(
        self, registry: Registry, request: httpx.Request, client: httpx.Client
    ) -> None:
        try:
            token = get_token(registry, client)
        except RegistryError as exc:
            raise AuthError(f"get token failed: {exc}") from exc
        request.headers["Authorization"] = f"JWT {token}"
        logger.debug("Set Authorization header")


@dataclass(frozen=True)
class PrivateRegistry:
    """A registry speaking the Docker Registry HTTP API V2."""

    host: str

    @property
    def base_url(self) -> str:
        return f"https://{self.host}"

    def authenticate(
        self, registry: Registry, request: httpx.Request, client: httpx.Client
    ) -> None:
        # Empty credentials mean anonymous access, not an error.
        if not registry.has_credentials():
            return
        userpass = f"{registry.username}:{registry.password}".encode()
        request.headers["Authorization"] = (
            f"Basic {base64.b64encode(userpass).decode()}"
        )
        logger.debug("Set basic auth")


RegistryEndpoint: TypeAlias = PublicHub | PrivateRegistry


def endpoint_for(name: RegistryName | str) -> RegistryEndpoint:
    name = RegistryName(name)
    if name.is_hub():
        return PublicHub()
    return PrivateRegistry(host=str(name))


def set_auth(
    registry: Registry, request: httpx.Request, client: httpx.Client
) -> None:
    """Attach the right credentials for ``registry`` to ``request``."""
    endpoint_for(registry.name).authenticate(registry, request, client)
