"""Volumes holding referenced masters."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from aplib.audit import Report, audit_get_int_value, audit_get_str_value
from aplib.model import AplibObject, AplibType
from aplib.plutils import parse_plist


def _checked(value: Any, kind: type, column: str) -> Any:
    if value is None:
        return None
    if not isinstance(value, kind) or isinstance(value, bool):
        raise TypeError(f"column {column}: expected {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class Volume(AplibObject):
    """A disk volume."""

    TABLES: ClassVar[str] = "RKVolume"
    COLUMNS: ClassVar[str] = "modelId, uuid, name, diskUuid"

    uuid: str | None = None
    model_id: int | None = None
    disk_uuid: str | None = None
    volume_name: str | None = None

    def obj_type(self) -> AplibType:
        return AplibType.VOLUME

    def parent(self) -> str | None:
        return None

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> Volume:
        """Build from a database row selected with ``COLUMNS``.

        Raises TypeError when a column holds a value of the wrong type.
        """
        return cls(
            model_id=_checked(row[0], int, "modelId"),
            uuid=_checked(row[1], str, "uuid"),
            volume_name=_checked(row[2], str, "name"),
            disk_uuid=_checked(row[3], str, "diskUuid"),
        )

    @classmethod
    def from_path(cls, path: str | os.PathLike, report: Report | None = None) -> Volume | None:
        """Load a volume from its plist; None when it can't be decoded."""
        data = parse_plist(path)
        if not isinstance(data, dict):
            return None
        return cls(
            uuid=audit_get_str_value(data, "uuid", report),
            model_id=audit_get_int_value(data, "modelId", report),
            disk_uuid=audit_get_str_value(data, "diskUuid", report),
            volume_name=audit_get_str_value(data, "volumeName", report),
        )