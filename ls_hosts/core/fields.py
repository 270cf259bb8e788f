"""Projection of EC2 instance records into table rows.

Each field name is parsed into a :class:`FieldSpec`. Known kinds map to a
single value; ``tag:<key>`` maps to the tag value when the tag exists.
Unknown field names and missing tags contribute no value at all, so such a
row is shorter than the header and later columns shift left.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ls_hosts.constants import TAG_FIELD_PREFIX, FieldKind

_KEYWORD_KINDS = {
    kind.value: kind
    for kind in FieldKind
    if kind not in (FieldKind.TAG, FieldKind.UNKNOWN)
}


@dataclass(frozen=True)
class FieldSpec:
    """A parsed output column."""

    name: str
    kind: FieldKind
    tag_key: str | None = None

    @classmethod
    def parse(cls, name: str) -> FieldSpec:
        """Parse a field name.

        Parameters
        ----------
        name : str
            Keyword such as ``instance-id`` or a ``tag:<key>`` reference

        Returns
        -------
        FieldSpec
            Parsed field; ``FieldKind.UNKNOWN`` for anything unrecognised,
            including ``tag:`` with an empty key
        """
        if name in _KEYWORD_KINDS:
            return cls(name=name, kind=_KEYWORD_KINDS[name])

        if name.startswith(TAG_FIELD_PREFIX) and len(name) > len(TAG_FIELD_PREFIX):
            return cls(name=name, kind=FieldKind.TAG, tag_key=name[len(TAG_FIELD_PREFIX):])

        return cls(name=name, kind=FieldKind.UNKNOWN)


def collect_private_ips(instance: dict[str, Any]) -> list[str]:
    """Return every private IP, interface by interface."""
    return [
        address["PrivateIpAddress"]
        for nic in instance.get("NetworkInterfaces", [])
        for address in nic.get("PrivateIpAddresses", [])
    ]


def collect_public_ips(instance: dict[str, Any]) -> list[str]:
    """Return at most one public IP per network interface.

    The public IP of the first associated private address is taken.
    """
    public_ips = []

    for nic in instance.get("NetworkInterfaces", []):
        for address in nic.get("PrivateIpAddresses", []):
            association = address.get("Association")
            if association and association.get("PublicIp"):
                public_ips.append(association["PublicIp"])
                break

    return public_ips


def collect_tags(tags: Iterable[dict[str, str]]) -> dict[str, str]:
    # NOTE: one value per key, the last duplicate wins
    return {tag["Key"]: tag.get("Value", "") for tag in tags}


def format_launch_time(launch_time: datetime | str) -> str:
    if isinstance(launch_time, datetime):
        return launch_time.isoformat()
    return str(launch_time)


def project_instance(instance: dict[str, Any], field_names: Sequence[str]) -> list[str]:
    """Project an instance into row values.

    Parameters
    ----------
    instance : dict[str, Any]
        Instance dictionary from a DescribeInstances response
    field_names : Sequence[str]
        Output columns in order

    Returns
    -------
    list[str]
        One value per recognised field. Unknown fields and missing tags
        produce no entry
    """
    tags = collect_tags(instance.get("Tags", []))
    values: list[str] = []

    for spec in map(FieldSpec.parse, field_names):
        if spec.kind is FieldKind.INSTANCE_ID:
            values.append(instance["InstanceId"])
        elif spec.kind is FieldKind.PRIVATE_IP:
            values.append(",".join(collect_private_ips(instance)))
        elif spec.kind is FieldKind.PUBLIC_IP:
            values.append(",".join(collect_public_ips(instance)))
        elif spec.kind is FieldKind.LAUNCH_TIME:
            values.append(format_launch_time(instance["LaunchTime"]))
        elif spec.kind is FieldKind.INSTANCE_STATE:
            values.append(instance["State"]["Name"])
        elif spec.kind is FieldKind.TAG and spec.tag_key in tags:
            values.append(tags[spec.tag_key])

    return values
