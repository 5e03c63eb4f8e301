"""Versions: the rendered images of a library."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from aplib.audit import (
    Report,
    SkipReason,
    audit_get_array_value,
    audit_get_bool_value,
    audit_get_date_value,
    audit_get_dict_value,
    audit_get_int_value,
    audit_get_str_value,
)
from aplib.custominfo import CustomInfoProperties, parse_custom_info
from aplib.exif import ExifProperties, parse_exif
from aplib.iptc import IptcProperties, parse_iptc
from aplib.model import AplibObject, AplibType
from aplib.plutils import parse_plist
from aplib.xmp import ToXmp, Xmp

_IGNORED_KEYS = (
    "statistics",
    "thumbnailGroup",
    "faceDetectionIsFromPreview",
    "processedHeight",
    "processedWidth",
    "masterHeight",
    "masterWidth",
    "supportedStatus",
    "showInLibrary",
    "adjustmentProperties",
    "RKImageAdjustments",
    "hasAdjustments",
    "hasEnabledAdjustments",
    "renderVersion",
    "imageProxyState",
    "plistWriteTimestamp",
)


@dataclass
class Version(AplibObject, ToXmp):
    """A rendered image attached to a master; one is the original."""

    uuid: str | None = None
    model_id: int | None = None
    master_uuid: str | None = None
    project_uuid: str | None = None
    raw_master_uuid: str | None = None
    nonraw_master_uuid: str | None = None
    timezone_name: str | None = None
    create_date: datetime | None = None
    image_date: datetime | None = None
    export_image_change_date: datetime | None = None
    export_metadata_change_date: datetime | None = None
    version_number: int | None = None
    db_version: int | None = None
    db_minor_version: int | None = None
    is_flagged: bool | None = None
    is_original: bool | None = None
    is_editable: bool | None = None
    is_hidden: bool | None = None
    is_in_trash: bool | None = None
    file_name: str | None = None
    name: str | None = None
    rating: int | None = None
    rotation: int | None = None
    colour_label_index: int | None = None
    iptc: IptcProperties | None = None
    exif: ExifProperties | None = None
    custom_info: CustomInfoProperties | None = None
    keywords: list[Any] | None = None

    def obj_type(self) -> AplibType:
        return AplibType.VERSION

    def parent(self) -> str | None:
        return self.master_uuid

    def to_xmp(self, xmp: Xmp) -> bool:
        """Push Exif then IPTC properties, so IPTC wins where both map."""
        if self.exif is not None:
            self.exif.to_xmp(xmp)
        if self.iptc is not None:
            self.iptc.to_xmp(xmp)
        return True

    @classmethod
    def from_path(cls, path: str | os.PathLike, report: Report | None = None) -> Version | None:
        """Load a version from its plist; None when it can't be decoded."""
        data = parse_plist(path)
        if not isinstance(data, dict):
            return None
        iptc = audit_get_dict_value(data, "iptcProperties", report)
        exif = audit_get_dict_value(data, "exifProperties", report)
        custom_info = audit_get_dict_value(data, "customInfo", report)
        version = cls(
            uuid=audit_get_str_value(data, "uuid", report),
            master_uuid=audit_get_str_value(data, "masterUuid", report),
            project_uuid=audit_get_str_value(data, "projectUuid", report),
            raw_master_uuid=audit_get_str_value(data, "rawMasterUuid", report),
            nonraw_master_uuid=audit_get_str_value(data, "nonRawMasterUuid", report),
            timezone_name=audit_get_str_value(data, "imageTimeZoneName", report),
            create_date=audit_get_date_value(data, "createDate", report),
            image_date=audit_get_date_value(data, "imageDate", report),
            export_image_change_date=audit_get_date_value(
                data, "exportImageChangeDate", report
            ),
            export_metadata_change_date=audit_get_date_value(
                data, "exportMetadataChangeDate", report
            ),
            version_number=audit_get_int_value(data, "versionNumber", report),
            db_version=audit_get_int_value(data, "version", report),
            db_minor_version=audit_get_int_value(data, "minorVersion", report),
            is_flagged=audit_get_bool_value(data, "isFlagged", report),
            is_original=audit_get_bool_value(data, "isOriginal", report),
            is_editable=audit_get_bool_value(data, "isEditable", report),
            is_hidden=audit_get_bool_value(data, "isHidden", report),
            is_in_trash=audit_get_bool_value(data, "isInTrash", report),
            file_name=audit_get_str_value(data, "fileName", report),
            name=audit_get_str_value(data, "name", report),
            model_id=audit_get_int_value(data, "modelId", report),
            rating=audit_get_int_value(data, "mainRating", report),
            rotation=audit_get_int_value(data, "rotation", report),
            colour_label_index=audit_get_int_value(data, "colorLabelIndex", report),
            iptc=parse_iptc(iptc, report),
            exif=parse_exif(exif, report),
            custom_info=parse_custom_info(custom_info, report),
            keywords=audit_get_array_value(data, "keywords", report),
        )
        if report is not None:
            for key in _IGNORED_KEYS:
                report.skip(key, SkipReason.IGNORE)
            report.audit_ignored(data, None)
        return version