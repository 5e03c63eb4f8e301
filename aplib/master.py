"""Masters: the files backing the images of a library."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime

from aplib.audit import (
    Report,
    SkipReason,
    audit_get_array_value,
    audit_get_bool_value,
    audit_get_data_value,
    audit_get_date_value,
    audit_get_int_value,
    audit_get_str_value,
)
from aplib.model import AplibObject, AplibType
from aplib.notes import NotesProperties, parse_notes
from aplib.plutils import parse_plist

_IGNORED_KEYS = (
    "fileAliasData",
    "importedBy",
    "importGroup",
    "plistWriteTimestamp",
)


@dataclass
class Master(AplibObject):
    """A file backing an image; its parent is the project it belongs to."""

    uuid: str | None = None
    model_id: int | None = None
    project_uuid: str | None = None
    alternate_master: str | None = None
    """For RAW+JPEG, the uuid of the other master."""
    original_version_uuid: str | None = None
    import_group_uuid: str | None = None
    filename: str | None = None
    name: str | None = None
    original_version_name: str | None = None
    db_version: int | None = None
    master_type: str | None = None
    subtype: str | None = None
    image_path: str | None = None
    is_reference: bool | None = None
    is_truly_raw: bool | None = None
    is_in_trash: bool | None = None
    is_missing: bool | None = None
    is_externaly_editable: bool | None = None
    create_date: datetime | None = None
    image_date: datetime | None = None
    file_creation_date: datetime | None = None
    file_modification_date: datetime | None = None
    original_file_name: str | None = None
    file_size: int | None = None
    file_volume_uuid: str | None = None
    color_space_name: str | None = None
    pixel_format: int | None = None
    has_focus_points: int | None = None
    image_format: int | None = None
    notes: list[NotesProperties] | None = None
    colour_space_definition: bytes | None = None
    face_detection_state: int | None = None

    def obj_type(self) -> AplibType:
        return AplibType.MASTER

    def parent(self) -> str | None:
        return self.project_uuid

    @classmethod
    def from_path(cls, path: str | os.PathLike, report: Report | None = None) -> Master | None:
        """Load a master from its plist; None when it can't be decoded."""
        data = parse_plist(path)
        if not isinstance(data, dict):
            return None
        notes = audit_get_array_value(data, "notes", report)
        master = cls(
            uuid=audit_get_str_value(data, "uuid", report),
            alternate_master=audit_get_str_value(data, "alternateMasterUuid", report),
            original_version_uuid=audit_get_str_value(data, "originalVersionUuid", report),
            project_uuid=audit_get_str_value(data, "projectUuid", report),
            import_group_uuid=audit_get_str_value(data, "importGroupUuid", report),
            filename=audit_get_str_value(data, "fileName", report),
            name=audit_get_str_value(data, "name", report),
            original_version_name=audit_get_str_value(data, "originalVersionName", report),
            original_file_name=audit_get_str_value(data, "originalFileName", report),
            file_volume_uuid=audit_get_str_value(data, "fileVolumeUuid", report),
            db_version=audit_get_int_value(data, "version", report),
            master_type=audit_get_str_value(data, "type", report),
            subtype=audit_get_str_value(data, "subtype", report),
            model_id=audit_get_int_value(data, "modelId", report),
            image_path=audit_get_str_value(data, "imagePath", report),
            file_size=audit_get_int_value(data, "fileSize", report),
            is_reference=audit_get_bool_value(data, "fileIsReference", report),
            is_externaly_editable=audit_get_bool_value(data, "isExternallyEditable", report),
            is_in_trash=audit_get_bool_value(data, "isInTrash", report),
            is_missing=audit_get_bool_value(data, "isMissing", report),
            is_truly_raw=audit_get_bool_value(data, "isTrulyRaw", report),
            color_space_name=audit_get_str_value(data, "colorSpaceName", report),
            create_date=audit_get_date_value(data, "createDate", report),
            image_date=audit_get_date_value(data, "imageDate", report),
            file_creation_date=audit_get_date_value(data, "fileCreationDate", report),
            file_modification_date=audit_get_date_value(data, "fileModificationDate", report),
            has_focus_points=audit_get_int_value(data, "hasFocusPoints", report),
            image_format=audit_get_int_value(data, "imageFormat", report),
            pixel_format=audit_get_int_value(data, "pixelFormat", report),
            colour_space_definition=audit_get_data_value(data, "colorSpaceDefinition", report),
            notes=parse_notes(notes, report),
            face_detection_state=audit_get_int_value(data, "faceDetectionState", report),
        )
        if report is not None:
            for key in _IGNORED_KEYS:
                report.skip(key, SkipReason.IGNORE)
            report.audit_ignored(data, None)
        return master