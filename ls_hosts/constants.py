"""Global constants for ls-hosts."""

from enum import Enum

DEFAULT_PROFILE = "default"
"""Profile used when neither the config file nor the CLI names one."""

DEFAULT_FIELDS = (
    "tag:Name",
    "instance-id",
    "private-ip",
    "public-ip",
    "instance-state",
)
"""Columns shown when fewer than two fields are configured."""

TAG_FIELD_PREFIX = "tag:"

USER_CONFIG_FILENAME = ".ls-hosts"
"""Per-user config file, relative to ``$HOME``."""

SYSTEM_CONFIG_PATH = "/etc/ls-hosts.conf"

CONFIG_SECTION = "options"

DEFAULT_AWS_CONFIG_FILE = "~/.aws/config"

DEFAULT_SHARED_CREDENTIALS_FILE = "~/.aws/credentials"

CREDENTIAL_SOURCES = ("env", "shared", "iam")
"""Credential sources in the order they are tried when none is configured."""

IMDS_TIMEOUT_SECONDS = 1
"""Timeout for instance metadata requests.

Kept short so that machines outside EC2 fail over quickly.
"""

IMDS_NUM_ATTEMPTS = 1

TABLE_MIN_WIDTH = 1
TABLE_TAB_WIDTH = 8
TABLE_PADDING = 1


class FieldKind(str, Enum):
    """Kinds of output columns."""

    INSTANCE_ID = "instance-id"
    PRIVATE_IP = "private-ip"
    PUBLIC_IP = "public-ip"
    INSTANCE_STATE = "instance-state"
    LAUNCH_TIME = "launch-time"
    TAG = "tag"
    UNKNOWN = "unknown"
