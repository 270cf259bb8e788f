"""AWS provider implementation."""

from ls_hosts.providers.aws.compute import EC2Manager, build_filters
from ls_hosts.providers.aws.credentials import select_credentials

__all__ = ["EC2Manager", "build_filters", "select_credentials"]
