"""CLI entry point for ls-hosts."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

import fire

from ls_hosts import __version__
from ls_hosts.cli.parsing import build_cli_layer, normalize_cli_value
from ls_hosts.core.config import ConfigLoader
from ls_hosts.core.describe import describe
from ls_hosts.core.table import TableWriter
from ls_hosts.logging import StreamFormatter
from ls_hosts.providers.exceptions import (
    CredentialsError,
    NotFoundError,
    ProviderRequestError,
)

EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def configure_logging(debug_mode: bool) -> None:
    """Send log records to stderr, keeping stdout for the table.

    Parameters
    ----------
    debug_mode : bool
        Whether debug logging is enabled
    """
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StreamFormatter("%(message)s"))

    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.WARNING,
        handlers=[stderr_handler],
        force=True,
    )

    for boto_module in ["botocore", "boto3", "urllib3"]:
        logging.getLogger(boto_module).setLevel(logging.WARNING)


def build_command(version: str) -> Any:
    """Create the Fire command bound to a version string.

    Parameters
    ----------
    version : str
        Version printed by ``-v``

    Returns
    -------
    Any
        Command function for Fire
    """

    def ls_hosts(
        profile: str | None = None,
        filters: str | None = None,
        tags: str | None = None,
        fields: str | None = None,
        region: str | None = None,
        creds: str | None = None,
        noheader: bool = False,
        v: bool = False,
    ) -> None:
        """List EC2 instances as a tab-separated table.

        Args:
            profile: profile name of aws credentials
            filters: key1:value1,key2:value2,...
            tags: key1:value1,key2:value2,...
            fields: column1,column2,...
            region: region name
            creds: env, shared, iam
            noheader: hide header
            v: show version
        """
        if v:
            print(f"version: {version}")
            return

        cli_layer = build_cli_layer(
            profile=normalize_cli_value(profile),
            filters=normalize_cli_value(filters),
            tags=normalize_cli_value(tags),
            fields=normalize_cli_value(fields),
            region=normalize_cli_value(region),
            creds=normalize_cli_value(creds),
            noheader=bool(noheader),
        )
        settings = ConfigLoader().load_settings(cli_layer)
        describe(settings, TableWriter(sys.stdout))

    return ls_hosts


def handle_error(error: Exception, debug_mode: bool, exit_code: int = EXIT_ERROR) -> None:
    """Print an error to stderr and exit.

    Parameters
    ----------
    error : Exception
        The error that was raised
    debug_mode : bool
        Whether debug mode is enabled
    exit_code : int
        Process exit status

    Raises
    ------
    Exception
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(str(error), file=sys.stderr)
    sys.exit(exit_code)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle configuration errors.

    Parameters
    ----------
    error : ValueError
        The value error that was raised
    debug_mode : bool
        Whether debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def main(argv: Sequence[str] | None = None, version: str = __version__) -> None:
    """Entry point for the Fire CLI with error handling.

    Parameters
    ----------
    argv : Sequence[str] | None
        Command line arguments. If None, uses sys.argv[1:]
    version : str
        Version reported by ``-v``
    """
    debug_mode = os.environ.get("LS_HOSTS_DEBUG") == "1"
    configure_logging(debug_mode)

    command = list(argv) if argv is not None else sys.argv[1:]

    try:
        fire.Fire(build_command(version), command=command, name="ls-hosts")
    except (CredentialsError, NotFoundError, ProviderRequestError) as e:
        handle_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
