"""Configuration for listing a container registry."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Self

import yaml
from pydantic import BeforeValidator, Field, SecretStr
from safir.pydantic import CamelCaseModel

from .models.registry import (
    Registry,
    RegistryName,
    RegistryPassword,
    RegistryUsername,
    password_from_file,
)
from .storage.docker_config import (
    DOCKER_CONFIG,
    read_credentials_from_docker_config,
)
from .storage.lister import DEFAULT_PAGE_SIZE


def _empty_str_is_none(inp: Any) -> Any:
    if isinstance(inp, str) and inp == "":
        return None
    return inp


class ListerConfig(CamelCaseModel):
    """Configuration to talk to a particular container registry.

    A ``password_file`` wins over ``password``, and credentials from the
    Docker config file overwrite both, along with ``username``.
    """

    registry: Annotated[
        str,
        Field(
            title="Registry",
            description="Registry host name, or 'docker.io' for Docker Hub",
            examples=["docker.io", "registry.example.com"],
        ),
    ]

    username: Annotated[
        str,
        Field(
            title="Username",
            description="Username (if any) for authentication.",
            examples=["fbooth"],
        ),
    ] = ""

    password: Annotated[
        SecretStr | None,
        BeforeValidator(_empty_str_is_none),
        Field(
            title="Password",
            description="Password for authentication.",
            examples=["hunter2"],
        ),
    ] = None

    password_file: Annotated[
        Path | None,
        BeforeValidator(_empty_str_is_none),
        Field(
            title="Password file",
            description="File whose contents (trimmed) are the password.",
        ),
    ] = None

    credentials_from_docker_config: Annotated[
        bool,
        Field(
            title="Credentials from Docker config",
            description=(
                "Read username and password from the Docker client config "
                "file, overriding username."
            ),
        ),
    ] = False

    docker_config: Annotated[
        Path,
        Field(
            title="Docker config",
            description="Location of the Docker client config file.",
        ),
    ] = DOCKER_CONFIG

    page_size: Annotated[
        int,
        Field(
            title="Page size",
            description="Number of entries to request per page.",
            gt=0,
        ),
    ] = DEFAULT_PAGE_SIZE

    timeout: Annotated[
        float,
        Field(
            title="Timeout",
            description="Timeout in seconds for each HTTP request.",
            gt=0,
        ),
    ] = 30.0

    debug: Annotated[
        bool,
        Field(
            title="Debug",
            description="Much more verbose logging.",
        ),
    ] = False

    @classmethod
    def from_file(cls, path: Path) -> Self:
        return cls.model_validate(yaml.safe_load(path.read_text()))

    def build_registry(self) -> Registry:
        """Resolve the password and build the (unvalidated) registry."""
        password = RegistryPassword("")
        if self.password_file is not None:
            password = password_from_file(self.password_file)
        elif self.password is not None:
            password = RegistryPassword(self.password.get_secret_value())
        registry = Registry(
            name=RegistryName(self.registry),
            username=RegistryUsername(self.username),
            password=password,
        )
        if self.credentials_from_docker_config:
            read_credentials_from_docker_config(registry, self.docker_config)
        return registry
