"""Read registry credentials from a Docker client config file."""

import base64
import binascii
from pathlib import Path
from typing import IO

import pydantic
import structlog

from ..exceptions import (
    DecodeError,
    MalformedCredentialError,
    NotFoundError,
    RegistryIOError,
)
from ..models.documents import DockerConfig
from ..models.registry import (
    Registry,
    RegistryName,
    RegistryPassword,
    RegistryUsername,
    ResolvedCredentials,
)

DOCKER_CONFIG = Path("~/.docker/config.json")
HUB_INDEX_DOMAIN = "https://index.docker.io/v1/"


def name_to_domain(name: RegistryName) -> str:
    """Docker still files hub credentials under the old v1 index URL."""
    if name.is_hub():
        return HUB_INDEX_DOMAIN
    return str(name)


def read_credentials(
    registry: Registry, path: Path = DOCKER_CONFIG
) -> ResolvedCredentials:
    """Look up credentials for ``registry`` in the Docker config file."""
    config_path = path.expanduser()
    try:
        with config_path.open("rb") as f:
            return credentials_from_stream(registry.name, f)
    except OSError as exc:
        raise RegistryIOError(f"open file {config_path} failed") from exc


def credentials_from_stream(
    name: RegistryName, stream: IO[bytes] | IO[str]
) -> ResolvedCredentials:
    """Extract credentials for registry ``name`` from a Docker config
    document.

    Parameters
    ----------
    name
        Registry whose entry should be used.
    stream
        Readable file-like object holding the JSON config.

    Returns
    -------
    ResolvedCredentials
        Username and password.  The password keeps any embedded colons.

    Raises
    ------
    DecodeError
        The document is not valid JSON of the expected shape, or the auth
        blob is not valid base64.
    NotFoundError
        The document has no entry for the registry.
    MalformedCredentialError
        The decoded auth blob has no ``:`` separator.
    """
    try:
        config = DockerConfig.model_validate_json(stream.read())
    except pydantic.ValidationError as exc:
        raise DecodeError("decode json failed") from exc
    domain = name_to_domain(RegistryName(name))
    entry = config.auths.get(domain)
    if entry is None:
        raise NotFoundError(f"domain {domain} not found in docker config")
    try:
        value = base64.b64decode(entry.auth, validate=True).decode()
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise DecodeError("base64 decode auth failed") from exc
    username, sep, password = value.partition(":")
    if not sep:
        raise MalformedCredentialError("split auth failed: no ':' found")
    return ResolvedCredentials(
        username=RegistryUsername(username),
        password=RegistryPassword(password),
    )


def read_credentials_from_docker_config(
    registry: Registry, path: Path = DOCKER_CONFIG
) -> None:
    """Overwrite the registry's username and password with the ones found
    in the Docker config file.
    """
    registry.apply_credentials(read_credentials(registry, path))
    structlog.get_logger(__name__).debug(
        f"Read credentials for '{registry.username}' at {registry.name}"
        " from docker config"
    )
