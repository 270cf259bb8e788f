"""Cloud provider integration."""

from __future__ import annotations

from ls_hosts.providers.exceptions import (
    CredentialsError,
    NotFoundError,
    ProviderConnectionError,
    ProviderError,
    ProviderRequestError,
)

__all__ = [
    "ProviderError",
    "CredentialsError",
    "ProviderRequestError",
    "ProviderConnectionError",
    "NotFoundError",
]
