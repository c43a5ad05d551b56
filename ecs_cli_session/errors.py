"""Errors raised while building AWS sessions."""

from botocore.exceptions import NoCredentialsError


class SessionConstructionError(Exception):
    """Raised when a session cannot be built at all.

    Only used where a session depends on another one being constructed first
    (role assumption needs the default session). The original exception is
    kept as ``__cause__``.
    """

    pass


class CredentialResolutionError(NoCredentialsError):
    """Raised on first use when no provider in the credential chain yields credentials.

    Subclasses botocore's ``NoCredentialsError`` so existing handlers keep
    working; the message lists every provider that was consulted, in order.
    """

    fmt = "Unable to locate credentials. Tried credential providers in order: {providers}"

    @property
    def providers(self) -> list[str]:
        return [p for p in self.kwargs.get("providers", "").split(", ") if p]
