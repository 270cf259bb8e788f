"""Pytest configuration and fixtures for ls-hosts tests."""

import os
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

AWS_ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_SECURITY_TOKEN",
    "AWS_PROFILE",
    "AWS_DEFAULT_PROFILE",
    "AWS_DEFAULT_REGION",
    "AWS_REGION",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every config lookup at an empty temporary home directory.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory path
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture

    Returns
    -------
    Path
        Temporary home directory
    """
    home = tmp_path / "home"
    home.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(home / ".aws" / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(home / ".aws" / "credentials"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")
    monkeypatch.delenv("LS_HOSTS_CONFIG", raising=False)
    monkeypatch.delenv("LS_HOSTS_DEBUG", raising=False)

    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    return home


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    old_access_key = os.environ.get("AWS_ACCESS_KEY_ID")
    old_secret_key = os.environ.get("AWS_SECRET_ACCESS_KEY")

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"

    yield

    if old_access_key is not None:
        os.environ["AWS_ACCESS_KEY_ID"] = old_access_key
    else:
        os.environ.pop("AWS_ACCESS_KEY_ID", None)

    if old_secret_key is not None:
        os.environ["AWS_SECRET_ACCESS_KEY"] = old_secret_key
    else:
        os.environ.pop("AWS_SECRET_ACCESS_KEY", None)


@pytest.fixture
def write_ini(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing an INI file below tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def make_instance() -> Callable[..., dict[str, Any]]:
    """Return a factory for DescribeInstances instance dictionaries."""

    def _make(
        instance_id: str = "i-0123456789abcdef0",
        state: str = "running",
        tags: dict[str, str] | None = None,
        interfaces: list[list[tuple[str, str | None]]] | None = None,
        launch_time: datetime | None = None,
    ) -> dict[str, Any]:
        network_interfaces = []
        for addresses in interfaces or []:
            private_addresses = []
            for private_ip, public_ip in addresses:
                entry: dict[str, Any] = {"PrivateIpAddress": private_ip}
                if public_ip is not None:
                    entry["Association"] = {"PublicIp": public_ip}
                private_addresses.append(entry)
            network_interfaces.append({"PrivateIpAddresses": private_addresses})

        return {
            "InstanceId": instance_id,
            "State": {"Code": 16, "Name": state},
            "Tags": [{"Key": key, "Value": value} for key, value in (tags or {}).items()],
            "NetworkInterfaces": network_interfaces,
            "LaunchTime": launch_time or datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
        }

    return _make
