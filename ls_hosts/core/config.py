"""Settings model and layered configuration loading."""

from __future__ import annotations

import configparser
import copy
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from botocore.configloader import load_config as load_aws_config
from botocore.exceptions import ConfigNotFound, ConfigParseError
from omegaconf import OmegaConf

from ls_hosts.cli.parsing import parse_bool, parse_fields_string, parse_filter_string
from ls_hosts.constants import (
    CONFIG_SECTION,
    DEFAULT_AWS_CONFIG_FILE,
    DEFAULT_FIELDS,
    DEFAULT_PROFILE,
    SYSTEM_CONFIG_PATH,
    USER_CONFIG_FILENAME,
)

logger = logging.getLogger(__name__)

BUILT_IN_DEFAULTS: dict[str, Any] = {
    "profile": DEFAULT_PROFILE,
    "region": "",
    "credentials": "",
    "filters": {},
    "tag_filters": {},
    "fields": [],
    "noheader": False,
}


@dataclass(frozen=True)
class Settings:
    """Resolved options for a single invocation."""

    profile: str = DEFAULT_PROFILE
    region: str = ""
    credentials: str = ""
    filters: Mapping[str, str] = field(default_factory=dict)
    tag_filters: Mapping[str, str] = field(default_factory=dict)
    fields: tuple[str, ...] = ()
    noheader: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))
        object.__setattr__(self, "tag_filters", MappingProxyType(dict(self.tag_filters)))
        object.__setattr__(self, "fields", tuple(self.fields))

    def field_names(self) -> tuple[str, ...]:
        """Return the output columns.

        A field list with fewer than two entries falls back to the default
        columns, so a single ``-fields`` value is not honoured.

        Returns
        -------
        tuple[str, ...]
            Field names in output order
        """
        if len(self.fields) > 1:
            return self.fields
        return DEFAULT_FIELDS


def resolve_settings(layers: Sequence[Mapping[str, Any]]) -> Settings:
    """Merge option layers into Settings.

    Layers are given lowest precedence first. Mappings (``filters``,
    ``tag_filters``) merge key by key, every other value is replaced by the
    highest layer that sets it. ``noheader`` is OR-ed across layers so a
    higher layer cannot turn the header back on.

    Parameters
    ----------
    layers : Sequence[Mapping[str, Any]]
        Option dictionaries in ascending precedence

    Returns
    -------
    Settings
        Merged settings
    """
    merged = OmegaConf.merge(*(OmegaConf.create(dict(layer)) for layer in layers))
    values = OmegaConf.to_container(merged, resolve=False)

    values["noheader"] = any(bool(layer.get("noheader", False)) for layer in layers)

    return Settings(
        profile=str(values["profile"]),
        region=str(values["region"]),
        credentials=str(values["credentials"]),
        filters=values["filters"],
        tag_filters=values["tag_filters"],
        fields=values["fields"],
        noheader=values["noheader"],
    )


class ConfigLoader:
    """Load option layers from config files and the AWS config."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = copy.deepcopy(BUILT_IN_DEFAULTS)

    def config_paths(self) -> list[Path]:
        """Return config file candidates, lowest precedence first.

        The system file is overridden by ``$HOME/.ls-hosts``, which is
        overridden by the file named in ``LS_HOSTS_CONFIG``.

        Returns
        -------
        list[Path]
            Candidate config files; they need not exist
        """
        paths = [Path(SYSTEM_CONFIG_PATH)]

        home = os.environ.get("HOME")
        if home:
            paths.append(Path(home) / USER_CONFIG_FILENAME)

        override = os.environ.get("LS_HOSTS_CONFIG")
        if override:
            paths.append(Path(override))

        return paths

    def load_config(self, paths: Sequence[Path] | None = None) -> dict[str, Any]:
        """Load the ``[options]`` section from INI config files.

        Files are read one at a time and merged key by key, later files
        winning. Missing files are skipped. A repeated option inside a file
        keeps its last value. A file that cannot be parsed is reported and
        skipped without affecting the others.

        Parameters
        ----------
        paths : Sequence[Path] | None
            Config files, lowest precedence first. If None, uses
            :meth:`config_paths`

        Returns
        -------
        dict[str, Any]
            Option layer containing only the keys that were set
        """
        if paths is None:
            paths = self.config_paths()

        layer: dict[str, Any] = {}

        for path in paths:
            layer.update(self.load_config_file(path))

        return layer

    def load_config_file(self, path: Path) -> dict[str, Any]:
        """Load the ``[options]`` section of a single INI file.

        Parameters
        ----------
        path : Path
            Config file

        Returns
        -------
        dict[str, Any]
            Option layer, empty if the file is missing or unreadable
        """
        parser = configparser.ConfigParser(interpolation=None, strict=False)

        try:
            read_files = parser.read(path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable config file: %s", e)
            return {}

        if not read_files:
            return {}

        logger.debug("Loaded config file: %s", path)

        if not parser.has_section(CONFIG_SECTION):
            return {}

        section = parser[CONFIG_SECTION]
        layer: dict[str, Any] = {}

        for key, target in (
            ("profile", "profile"),
            ("region", "region"),
            ("creds", "credentials"),
        ):
            value = section.get(key, "")
            if value:
                layer[target] = value

        if section.get("filters"):
            layer["filters"] = parse_filter_string(section["filters"])

        if section.get("tags"):
            layer["tag_filters"] = parse_filter_string(section["tags"])

        if section.get("fields"):
            layer["fields"] = parse_fields_string(section["fields"])

        if "noheader" in section:
            layer["noheader"] = parse_bool(section["noheader"])

        return layer

    def load_profile_region(self, profile: str, path: str | None = None) -> str | None:
        """Look up the region stored for a profile in the AWS config file.

        Parameters
        ----------
        profile : str
            Profile name
        path : str | None
            AWS config file. If None, uses ``AWS_CONFIG_FILE`` or
            ``~/.aws/config``

        Returns
        -------
        str | None
            Region, or None if the file, the profile or the key is missing
        """
        if path is None:
            path = os.environ.get("AWS_CONFIG_FILE", DEFAULT_AWS_CONFIG_FILE)

        try:
            aws_config = load_aws_config(path)
        except ConfigNotFound:
            return None
        except ConfigParseError as e:
            logger.warning("Ignoring unreadable AWS config file %s: %s", path, e)
            return None

        region = aws_config.get("profiles", {}).get(profile, {}).get("region")
        return region or None

    def load_settings(
        self,
        cli_layer: Mapping[str, Any],
        paths: Sequence[Path] | None = None,
        aws_config_path: str | None = None,
    ) -> Settings:
        """Build Settings from defaults, config files, AWS config and CLI.

        Parameters
        ----------
        cli_layer : Mapping[str, Any]
            Options explicitly given on the command line
        paths : Sequence[Path] | None
            Config files, lowest precedence first
        aws_config_path : str | None
            AWS config file used for the profile region lookup

        Returns
        -------
        Settings
            Resolved settings
        """
        file_layer = self.load_config(paths)

        profile = (
            cli_layer.get("profile")
            or file_layer.get("profile")
            or self.BUILT_IN_DEFAULTS["profile"]
        )

        region_layer: dict[str, Any] = {}
        region = self.load_profile_region(profile, aws_config_path)
        if region:
            region_layer["region"] = region

        settings = resolve_settings(
            [self.BUILT_IN_DEFAULTS, file_layer, region_layer, cli_layer]
        )
        logger.debug(
            "Resolved profile '%s' in region '%s'", settings.profile, settings.region
        )
        return settings
