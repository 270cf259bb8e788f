"""EC2 instance queries for ls-hosts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import boto3
from botocore.credentials import Credentials

from ls_hosts.constants import TAG_FIELD_PREFIX
from ls_hosts.providers.aws.errors import handle_aws_errors

logger = logging.getLogger(__name__)


def build_filters(
    filters: Mapping[str, str], tag_filters: Mapping[str, str]
) -> list[dict[str, Any]]:
    """Build DescribeInstances filters from attribute and tag filters.

    Parameters
    ----------
    filters : Mapping[str, str]
        Attribute filters, e.g. ``{"instance-state-name": "running"}``
    tag_filters : Mapping[str, str]
        Tag filters, e.g. ``{"Role": "web"}``

    Returns
    -------
    list[dict[str, Any]]
        One exact-match filter per entry, tag keys prefixed with ``tag:``
    """
    result = [{"Name": key, "Values": [value]} for key, value in filters.items()]
    result.extend(
        {"Name": f"{TAG_FIELD_PREFIX}{key}", "Values": [value]}
        for key, value in tag_filters.items()
    )
    return result


class EC2Manager:
    """Query EC2 instances in a single region."""

    def __init__(
        self,
        region: str,
        credentials: Credentials,
        boto3_session_factory: Callable[..., Any] | None = None,
    ) -> None:
        """Initialize EC2 manager.

        Parameters
        ----------
        region : str
            AWS region for EC2 operations. Empty means the SDK decides,
            which fails when no region is configured anywhere
        credentials : Credentials
            Resolved botocore credentials
        boto3_session_factory : Callable[..., Any] | None
            Optional factory for creating boto3 sessions. If None, uses
            boto3.Session
        """
        self.region = region
        self.boto3_session_factory = boto3_session_factory or boto3.Session

        frozen = credentials.get_frozen_credentials()

        with handle_aws_errors():
            self.session = self.boto3_session_factory(
                aws_access_key_id=frozen.access_key,
                aws_secret_access_key=frozen.secret_key,
                aws_session_token=frozen.token,
                region_name=region or None,
            )
            self.ec2_client = self.session.client("ec2")

    def describe_instances(self, filters: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run a single DescribeInstances call.

        Only the first page of results is returned.

        Parameters
        ----------
        filters : list[dict[str, Any]]
            DescribeInstances filters, AND-combined by EC2

        Returns
        -------
        list[dict[str, Any]]
            Reservations in response order
        """
        logger.debug(
            "Describing instances in region '%s' with %d filter(s)",
            self.region,
            len(filters),
        )

        with handle_aws_errors():
            response = self.ec2_client.describe_instances(Filters=filters)

        reservations = response.get("Reservations", [])
        logger.debug("Received %d reservation(s)", len(reservations))
        return reservations
