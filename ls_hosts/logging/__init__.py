"""Logging utilities for ls-hosts."""

from ls_hosts.logging.formatters import StreamFormatter

__all__ = ["StreamFormatter"]
