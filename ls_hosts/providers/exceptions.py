"""Provider-agnostic exception hierarchy.

Provider implementations translate SDK specific errors into these types so
that the CLI error boundary never has to know about botocore.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for all provider errors."""


class CredentialsError(ProviderError):
    """Raised when no usable credentials can be resolved."""


class ProviderRequestError(ProviderError):
    """Raised when a provider API call fails.

    Parameters
    ----------
    message : str
        Error message, passed through verbatim from the provider
    error_code : str | None
        Provider specific error code (e.g. ``UnauthorizedOperation``)
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class ProviderConnectionError(ProviderRequestError):
    """Raised when the provider endpoint cannot be reached."""


class NotFoundError(ProviderError):
    """Raised when a query succeeds but matches no instances."""
