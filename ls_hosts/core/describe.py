"""Describe pipeline: query instances and render them as a table."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from botocore.credentials import Credentials

from ls_hosts.core.config import Settings
from ls_hosts.core.fields import project_instance
from ls_hosts.core.table import TableWriter
from ls_hosts.providers.aws import EC2Manager, build_filters, select_credentials
from ls_hosts.providers.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def header_row(field_names: tuple[str, ...]) -> list[str]:
    return [name.upper() for name in field_names]


def describe(
    settings: Settings,
    writer: TableWriter,
    ec2_manager_factory: Callable[[str, Credentials], Any] | None = None,
) -> None:
    """List matching instances into a table writer.

    Header and rows are buffered and the writer is flushed once after the
    last row. When an error is raised nothing has been flushed.

    Parameters
    ----------
    settings : Settings
        Resolved options
    writer : TableWriter
        Destination table
    ec2_manager_factory : Callable[[str, Credentials], Any] | None
        Optional factory taking region and credentials. If None, uses
        EC2Manager

    Raises
    ------
    CredentialsError
        If no credentials can be resolved
    ProviderRequestError
        If the API call fails
    NotFoundError
        If no reservations match the filters
    """
    ec2_manager_factory = ec2_manager_factory or EC2Manager

    credentials = select_credentials(settings.credentials, settings.profile)
    ec2_manager = ec2_manager_factory(settings.region, credentials)

    filters = build_filters(settings.filters, settings.tag_filters)
    reservations = ec2_manager.describe_instances(filters)

    if not reservations:
        raise NotFoundError("Not Found")

    field_names = settings.field_names()

    if not settings.noheader:
        writer.write_row(header_row(field_names))

    for reservation in reservations:
        for instance in reservation.get("Instances", []):
            writer.write_row(project_instance(instance, field_names))

    logger.debug("Writing %d line(s)", writer.pending_lines)
    writer.flush()
