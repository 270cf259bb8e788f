"""CLI argument parsing and handling."""

from __future__ import annotations

from ls_hosts.cli.parsing import (
    build_cli_layer,
    normalize_cli_value,
    parse_fields_string,
    parse_filter_string,
)

__all__ = [
    "build_cli_layer",
    "normalize_cli_value",
    "parse_filter_string",
    "parse_fields_string",
]
