"""Model for a container registry and the credentials used to talk to it."""

from dataclasses import dataclass
from pathlib import Path

from ..exceptions import RegistryIOError, ValidationError

HUB_NAME = "docker.io"
HUB_URL = "https://hub.docker.com"


class RegistryName(str):
    """Registry host name, or ``docker.io`` for the public Docker Hub."""

    def is_hub(self) -> bool:
        return self == HUB_NAME

    def url(self) -> str:
        if self.is_hub():
            return HUB_URL
        return f"https://{self}"

    def validate(self) -> None:
        if not self:
            raise ValidationError("registry empty")


class RegistryUsername(str):
    def validate(self) -> None:
        if not self:
            raise ValidationError("username empty")


class RegistryPassword(str):
    def __repr__(self) -> str:
        return "RegistryPassword('**********')"

    def validate(self) -> None:
        if not self:
            raise ValidationError("password empty")


class RegistryToken(str):
    """Bearer token from a Docker Hub login.  Never stored past one call."""

    def __repr__(self) -> str:
        return "RegistryToken('**********')"


class Repository(str):
    """Repository name as returned by the registry."""


class Tag(str):
    """Tag name as returned by the registry."""


@dataclass(frozen=True)
class ResolvedCredentials:
    """Username and password extracted from a credential store."""

    username: RegistryUsername
    password: RegistryPassword


@dataclass
class Registry:
    """Coordinates and credentials for one registry.

    Owned by a single caller.  Only ``apply_credentials`` mutates it, and
    it must not be shared across threads without external locking.
    """

    name: RegistryName
    username: RegistryUsername = RegistryUsername("")
    password: RegistryPassword = RegistryPassword("")
    token: RegistryToken = RegistryToken("")

    def __post_init__(self) -> None:
        self.name = RegistryName(self.name)
        self.username = RegistryUsername(self.username)
        self.password = RegistryPassword(self.password)
        self.token = RegistryToken(self.token)

    def validate_registry(self) -> None:
        """Raise ``ValidationError`` if name, username, or password is
        empty.
        """
        self.name.validate()
        self.username.validate()
        self.password.validate()

    def apply_credentials(self, creds: ResolvedCredentials) -> None:
        self.username = creds.username
        self.password = creds.password

    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.password)


def password_from_file(path: Path | str) -> RegistryPassword:
    """Read a password file, stripping surrounding whitespace."""
    try:
        content = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise RegistryIOError(f"read password file {path} failed") from exc
    return RegistryPassword(content.strip())
