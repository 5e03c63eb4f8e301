"""Folders and projects of a library."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from aplib.audit import (
    Report,
    SkipReason,
    audit_get_array_value,
    audit_get_bool_value,
    audit_get_date_value,
    audit_get_int_value,
    audit_get_str_value,
)
from aplib.model import AplibObject, AplibType
from aplib.notes import NotesProperties, parse_notes
from aplib.plutils import parse_plist

_IGNORED_KEYS = (
    "CustomOrderList",
    "projectCompatibleBackToVersion",
    "automaticallyGenerateFullSizePreviews",
)


class FolderType(IntEnum):
    """Type of folder."""

    INVALID = 0
    FOLDER = 1
    """Container of things."""
    PROJECT = 2
    """Project, contains only masters."""

    @classmethod
    def from_int(cls, value: int | None) -> FolderType | None:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass
class Folder(AplibObject):
    """A container of things in the library."""

    uuid: str | None = None
    parent_uuid: str | None = None
    model_id: int | None = None
    folder_type: FolderType | None = None
    db_version: int | None = None
    project_version: int | None = None
    path: str | None = None
    name: str | None = None
    implicit_album_uuid: str | None = None
    colour_label_index: int | None = None
    create_date: datetime | None = None
    sort_key_path: str | None = None
    sort_ascending: bool | None = None
    is_hidden: bool | None = None
    is_magic: bool | None = None
    is_favourite: bool | None = None
    is_in_trash: bool | None = None
    is_expanded: bool | None = None
    is_hidden_when_empty: bool | None = None
    poster_version_uuid: str | None = None
    notes: list[NotesProperties] | None = None

    def obj_type(self) -> AplibType:
        return AplibType.FOLDER

    def parent(self) -> str | None:
        return self.parent_uuid

    @classmethod
    def from_path(cls, path: str | os.PathLike, report: Report | None = None) -> Folder | None:
        """Load a folder from its plist; None when it can't be decoded."""
        data = parse_plist(path)
        if not isinstance(data, dict):
            return None
        notes = audit_get_array_value(data, "notes", report)
        folder = cls(
            path=audit_get_str_value(data, "folderPath", report),
            folder_type=FolderType.from_int(audit_get_int_value(data, "folderType", report)),
            model_id=audit_get_int_value(data, "modelId", report),
            name=audit_get_str_value(data, "name", report),
            parent_uuid=audit_get_str_value(data, "parentFolderUuid", report),
            uuid=audit_get_str_value(data, "uuid", report),
            implicit_album_uuid=audit_get_str_value(data, "implicitAlbumUuid", report),
            db_version=audit_get_int_value(data, "version", report),
            project_version=audit_get_int_value(data, "projectVersion", report),
            colour_label_index=audit_get_int_value(data, "colorLabelIndex", report),
            create_date=audit_get_date_value(data, "createDate", report),
            sort_key_path=audit_get_str_value(data, "sortKeyPath", report),
            sort_ascending=audit_get_bool_value(data, "sortAscending", report),
            is_hidden=audit_get_bool_value(data, "isHidden", report),
            is_magic=audit_get_bool_value(data, "isMagic", report),
            is_favourite=audit_get_bool_value(data, "isFavorite", report),
            is_in_trash=audit_get_bool_value(data, "isInTrash", report),
            is_expanded=audit_get_bool_value(data, "isExpanded", report),
            is_hidden_when_empty=audit_get_bool_value(data, "isHiddenWhenEmpty", report),
            poster_version_uuid=audit_get_str_value(data, "posterVersionUuid", report),
            notes=parse_notes(notes, report),
        )
        if report is not None:
            for key in _IGNORED_KEYS:
                report.skip(key, SkipReason.IGNORE)
            report.audit_ignored(data, None)
        return folder