"""Translation of botocore exceptions into provider exceptions."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
    ProfileNotFound,
    ReadTimeoutError,
)

from ls_hosts.providers.exceptions import (
    CredentialsError,
    ProviderConnectionError,
    ProviderRequestError,
)

logger = logging.getLogger(__name__)


@contextmanager
def handle_aws_errors() -> Iterator[None]:
    """Re-raise botocore errors as provider exceptions.

    Yields
    ------
    None
        Control to the wrapped block

    Raises
    ------
    CredentialsError
        If credentials are missing, incomplete or the profile does not exist
    ProviderConnectionError
        If the endpoint cannot be reached
    ProviderRequestError
        For API errors and any other botocore failure
    """
    try:
        yield
    except (NoCredentialsError, PartialCredentialsError, ProfileNotFound) as e:
        raise CredentialsError(str(e)) from e
    except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError) as e:
        raise ProviderConnectionError(str(e)) from e
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code")
        logger.debug("AWS API call failed with %s", error_code)
        raise ProviderRequestError(str(e), error_code=error_code) from e
    except BotoCoreError as e:
        raise ProviderRequestError(str(e)) from e
