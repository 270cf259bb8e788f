"""AWS credential source selection."""

from __future__ import annotations

import logging
import os

from botocore.credentials import (
    CredentialProvider,
    CredentialResolver,
    Credentials,
    EnvProvider,
    InstanceMetadataFetcher,
    InstanceMetadataProvider,
    SharedCredentialProvider,
)

from ls_hosts.constants import (
    CREDENTIAL_SOURCES,
    DEFAULT_SHARED_CREDENTIALS_FILE,
    IMDS_NUM_ATTEMPTS,
    IMDS_TIMEOUT_SECONDS,
)
from ls_hosts.providers.aws.errors import handle_aws_errors
from ls_hosts.providers.exceptions import CredentialsError

logger = logging.getLogger(__name__)


def _env_provider(profile: str) -> CredentialProvider:
    return EnvProvider()


def _shared_provider(profile: str) -> CredentialProvider:
    creds_filename = os.environ.get(
        "AWS_SHARED_CREDENTIALS_FILE", DEFAULT_SHARED_CREDENTIALS_FILE
    )
    return SharedCredentialProvider(creds_filename=creds_filename, profile_name=profile)


def _iam_provider(profile: str) -> CredentialProvider:
    fetcher = InstanceMetadataFetcher(
        timeout=IMDS_TIMEOUT_SECONDS, num_attempts=IMDS_NUM_ATTEMPTS
    )
    return InstanceMetadataProvider(iam_role_fetcher=fetcher)


_PROVIDER_BUILDERS = {
    "env": _env_provider,
    "shared": _shared_provider,
    "iam": _iam_provider,
}


def build_providers(source: str, profile: str) -> list[CredentialProvider]:
    """Build the credential providers to try for a credential source.

    Parameters
    ----------
    source : str
        One of ``env``, ``shared``, ``iam``, or empty for all of them in
        that order
    profile : str
        Profile name used by the shared credentials file

    Returns
    -------
    list[CredentialProvider]
        Providers in lookup order

    Raises
    ------
    ValueError
        If the source is not a known credential source
    """
    if not source:
        return [_PROVIDER_BUILDERS[name](profile) for name in CREDENTIAL_SOURCES]

    if source not in _PROVIDER_BUILDERS:
        raise ValueError(
            f"Unknown credentials source: '{source}'. "
            f"Valid sources: {', '.join(CREDENTIAL_SOURCES)}"
        )

    return [_PROVIDER_BUILDERS[source](profile)]


def select_credentials(source: str, profile: str) -> Credentials:
    """Resolve credentials from the configured source and profile.

    Parameters
    ----------
    source : str
        Credential source hint (``env``, ``shared``, ``iam`` or empty)
    profile : str
        Profile name for the shared credentials file

    Returns
    -------
    Credentials
        Resolved botocore credentials

    Raises
    ------
    CredentialsError
        If none of the providers yields credentials
    ValueError
        If the source is not a known credential source
    """
    resolver = CredentialResolver(providers=build_providers(source, profile))

    with handle_aws_errors():
        credentials = resolver.load_credentials()

    if credentials is None:
        raise CredentialsError(
            f"No valid credentials found (source: {source or 'any'}, profile: {profile})"
        )

    logger.debug("Loaded credentials via %s", credentials.method)
    return credentials
