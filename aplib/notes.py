"""Notes attached to folders and masters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from aplib.audit import (
    Report,
    SkipReason,
    audit_get_data_value,
    audit_get_date_value,
    audit_get_int_value,
    audit_get_str_value,
)


@dataclass
class NotesProperties:
    attached_to_uuid: str | None = None
    create_date: datetime | None = None
    data: bytes | None = None
    model_id: int | None = None
    note: str | None = None
    uuid: str | None = None
    property_key: str | None = None


def parse_note(data: dict, report: Report | None) -> NotesProperties:
    """Build a note from one element of a notes array."""
    result = NotesProperties(
        attached_to_uuid=audit_get_str_value(data, "attachedToUuid", report),
        create_date=audit_get_date_value(data, "createDate", report),
        data=audit_get_data_value(data, "data", report),
        model_id=audit_get_int_value(data, "modelId", report),
        note=audit_get_str_value(data, "note", report),
        property_key=audit_get_str_value(data, "propertyKey", report),
        uuid=audit_get_str_value(data, "uuid", report),
    )
    if report is not None:
        report.audit_ignored(data, "notes")
    return result


def parse_notes(array: list | None, report: Report | None) -> list[NotesProperties] | None:
    """Build the notes from a plist array; elements that aren't dicts are skipped."""
    if array is None:
        return None
    notes = []
    for counter, value in enumerate(array):
        if isinstance(value, dict):
            notes.append(parse_note(value, report))
        elif report is not None:
            report.skip(f"notes[{counter}]", SkipReason.INVALID_TYPE)
    return notes