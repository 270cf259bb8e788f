"""Core ls-hosts functionality."""

from __future__ import annotations

from ls_hosts.core.config import ConfigLoader, Settings, resolve_settings
from ls_hosts.core.describe import describe
from ls_hosts.core.fields import FieldSpec, project_instance
from ls_hosts.core.table import TableWriter

__all__ = [
    "ConfigLoader",
    "Settings",
    "resolve_settings",
    "describe",
    "FieldSpec",
    "project_instance",
    "TableWriter",
]
