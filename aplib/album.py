"""Albums of a library."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from aplib.audit import (
    Report,
    SkipReason,
    audit_get_bool_value,
    audit_get_date_value,
    audit_get_int_value,
    audit_get_str_value,
)
from aplib.model import AplibObject, AplibType
from aplib.plutils import get_array_value, get_dict_value, parse_plist


class AlbumSubclass(IntEnum):
    """Kind of album."""

    INVALID = 0
    IMPLICIT = 1
    """Used for folders."""
    SMART = 2
    USER = 3
    """User album with explicit content."""

    @classmethod
    def from_int(cls, value: int | None) -> AlbumSubclass | None:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass
class Album(AplibObject):
    """An album; ``content`` lists version uuids for user albums."""

    uuid: str | None = None
    folder_uuid: str | None = None
    model_id: int | None = None
    subclass: AlbumSubclass | None = None
    album_type: int | None = None
    query_folder_uuid: str | None = None
    db_version: int | None = None
    sort_asc: bool | None = None
    sort_key: str | None = None
    name: str | None = None
    custom_sort_available: bool | None = None
    colour_label_index: int | None = None
    create_date: datetime | None = None
    is_hidden: bool | None = None
    is_magic: bool | None = None
    is_favourite: bool | None = None
    is_in_trash: bool | None = None
    selected_track_path_uuid: str | None = None
    content: list[str] | None = None

    def obj_type(self) -> AplibType:
        return AplibType.ALBUM

    def parent(self) -> str | None:
        return self.folder_uuid

    @classmethod
    def from_path(cls, path: str | os.PathLike, report: Report | None = None) -> Album | None:
        """Load an album from its plist; None when it can't be decoded."""
        plist = parse_plist(path)
        if not isinstance(plist, dict):
            return None
        info = get_dict_value(plist, "InfoDictionary")
        if info is None:
            return None
        subclass = AlbumSubclass.from_int(audit_get_int_value(info, "albumSubclass", report))
        album = cls(
            uuid=audit_get_str_value(info, "uuid", report),
            folder_uuid=audit_get_str_value(info, "folderUuid", report),
            subclass=subclass,
            album_type=audit_get_int_value(info, "albumType", report),
            db_version=audit_get_int_value(info, "version", report),
            model_id=audit_get_int_value(info, "modelId", report),
            sort_asc=audit_get_bool_value(info, "sortAscending", report),
            sort_key=audit_get_str_value(info, "sortKeyPath", report),
            name=audit_get_str_value(info, "name", report),
            query_folder_uuid=audit_get_str_value(info, "queryFolderUuid", report),
            create_date=audit_get_date_value(info, "createDate", report),
            colour_label_index=audit_get_int_value(info, "colorLabelIndex", report),
            custom_sort_available=audit_get_bool_value(info, "customSortAvailable", report),
            is_hidden=audit_get_bool_value(info, "isHidden", report),
            is_magic=audit_get_bool_value(info, "isMagic", report),
            is_favourite=audit_get_bool_value(info, "isFavorite", report),
            is_in_trash=audit_get_bool_value(info, "isInTrash", report),
            selected_track_path_uuid=audit_get_str_value(info, "selectedTrackPathUuid", report),
            content=_content_from(plist, subclass, report),
        )
        if report is not None:
            report.audit_ignored(info, None)
        return album


def _content_from(
    data: dict, subclass: AlbumSubclass | None, report: Report | None
) -> list[str] | None:
    """Version uuids of a user album, from the ``versionUuids`` key."""
    array = get_array_value(data, "versionUuids")
    if array is None:
        return None
    if subclass is AlbumSubclass.USER:
        if report is not None:
            report.mark_parsed("versionUuids")
        return [item for item in array if isinstance(item, str)]
    if report is not None:
        report.skip("versionUuids", SkipReason.INVALID_DATA)
    return None