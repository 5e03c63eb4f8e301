"""Custom info block of a version."""

from __future__ import annotations

from dataclasses import dataclass

from aplib.audit import Report, audit_get_str_value


@dataclass
class CustomInfoProperties:
    camera_time_zone_name: str | None = None
    picture_time_zone_name: str | None = None


def parse_custom_info(data: dict | None, report: Report | None) -> CustomInfoProperties | None:
    """Build the custom info from its plist dict, None when absent."""
    if data is None:
        return None
    result = CustomInfoProperties(
        camera_time_zone_name=audit_get_str_value(data, "cameraTimeZoneName", report),
        picture_time_zone_name=audit_get_str_value(data, "pictureTimeZoneName", report),
    )
    if report is not None:
        report.audit_ignored(data, "customInfo")
    return result