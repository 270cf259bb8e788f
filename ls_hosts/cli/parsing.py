"""CLI and config value parsing utilities."""

from __future__ import annotations

from typing import Any


def normalize_cli_value(value: Any) -> str | None:
    """Turn a value parsed by Fire back into the string the user typed.

    Fire converts ``a,b`` into a tuple and ``123`` into an int. Option
    strings are parsed by this module, so such values are joined back.
    Conversions that lose the typed text cannot be undone: ``1e3`` arrives
    as ``1000.0`` and a literal ``None`` is indistinguishable from an
    omitted option.

    Parameters
    ----------
    value : Any
        Value received from Fire

    Returns
    -------
    str | None
        String form of the value, or None if the option was not given
    """
    if value is None:
        return None

    if isinstance(value, (tuple, list)):
        return ",".join(str(item) for item in value)

    return str(value)


def parse_filter_string(value: str) -> dict[str, str]:
    """Parse ``key1:value1,key2:value2`` into a dictionary.

    Entries without a ``:`` are dropped. Only the first ``:`` separates key
    and value, so values may contain colons. Later duplicates win.

    Parameters
    ----------
    value : str
        Comma-separated ``key:value`` pairs

    Returns
    -------
    dict[str, str]
        Parsed filters
    """
    filters: dict[str, str] = {}

    for entry in value.split(","):
        key, sep, filter_value = entry.partition(":")
        if sep:
            filters[key] = filter_value

    return filters


def parse_fields_string(value: str) -> list[str]:
    """Parse ``column1,column2,...`` into a list of field names.

    No trimming or deduplication; order is preserved.

    Parameters
    ----------
    value : str
        Comma-separated field names

    Returns
    -------
    list[str]
        Field names
    """
    return value.split(",")


def parse_bool(value: str) -> bool:
    """Parse a config file boolean. Only ``true`` enables it."""
    return value == "true"


def build_cli_layer(
    profile: str | None = None,
    filters: str | None = None,
    tags: str | None = None,
    fields: str | None = None,
    region: str | None = None,
    creds: str | None = None,
    noheader: bool = False,
) -> dict[str, Any]:
    """Build the command line option layer.

    Only options that were given and are non-empty end up in the layer.
    ``noheader`` is only recorded when set, so it can suppress the header
    but never re-enable one disabled in a config file.

    Parameters
    ----------
    profile : str | None
        Profile name
    filters : str | None
        Attribute filters as ``key:value,...``
    tags : str | None
        Tag filters as ``key:value,...``
    fields : str | None
        Output columns as ``column1,column2,...``
    region : str | None
        Region name
    creds : str | None
        Credential source
    noheader : bool
        Hide the header line

    Returns
    -------
    dict[str, Any]
        Option layer for the settings resolver
    """
    layer: dict[str, Any] = {}

    if profile:
        layer["profile"] = profile

    if filters:
        layer["filters"] = parse_filter_string(filters)

    if tags:
        layer["tag_filters"] = parse_filter_string(tags)

    if fields:
        layer["fields"] = parse_fields_string(fields)

    if region:
        layer["region"] = region

    if creds:
        layer["credentials"] = creds

    if noheader:
        layer["noheader"] = True

    return layer


__all__ = [
    "build_cli_layer",
    "normalize_cli_value",
    "parse_filter_string",
    "parse_fields_string",
    "parse_bool",
]
