"""Pydantic models for JSON documents read from disk or the registry."""

from typing import Annotated

from pydantic import BaseModel, Field


class CredentialFileEntry(BaseModel):
    """One registry's entry in the ``auths`` map of a Docker config."""

    auth: Annotated[
        str,
        Field(
            title="Auth",
            description="base64 encoding of 'username:password'.",
            examples=["YWxpY2U6czNjcjN0"],
        ),
    ]


class DockerConfig(BaseModel):
    """The parts of ``~/.docker/config.json`` we care about."""

    auths: Annotated[
        dict[str, CredentialFileEntry],
        Field(
            title="Auths",
            description="Credential entries keyed by registry domain.",
        ),
    ] = {}


class TokenResponse(BaseModel):
    """Response body of the Docker Hub login endpoint."""

    token: str


class HubEntry(BaseModel):
    """A repository or tag in a Docker Hub result page."""

    name: str
    namespace: str | None = None


class HubPage(BaseModel):
    """A page of Docker Hub results.  ``next`` is the next page URL."""

    next: str | None = None
    results: list[HubEntry] = []


class CatalogPage(BaseModel):
    """A page from the registry ``/v2/_catalog`` endpoint."""

    repositories: list[str] | None = None


class TagsPage(BaseModel):
    """A page from the registry ``/v2/<name>/tags/list`` endpoint."""

    name: str | None = None
    tags: list[str] | None = None
