"""Exceptions raised by the registry lister."""


class RegistryError(Exception):
    """Base class for every error the registry lister raises."""


class ValidationError(RegistryError):
    """A required registry field is missing or empty."""


class RegistryIOError(RegistryError):
    """A local file (password file, credential store) could not be read."""


class DecodeError(RegistryError):
    """Malformed JSON, an unexpected document shape, or bad base64."""


class MalformedCredentialError(RegistryError):
    """A decoded credential-store auth blob has no ``:`` separator."""


class NotFoundError(RegistryError):
    """The requested credential-store domain or repository is absent."""


class AuthError(RegistryError):
    """Login failed, or the registry rejected a request."""


class NetworkError(RegistryError):
    """The request never got a response from the registry."""
