"""ls-hosts - list EC2 instances as a table."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ls-hosts")
except PackageNotFoundError:
    __version__ = "unknown"
