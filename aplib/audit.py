"""Audit reports: which plist properties were parsed, skipped or ignored."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from aplib import plutils

T = TypeVar("T")


class SkipReason(Enum):
    """Why a property was skipped."""

    NONE = "None"
    NOT_FOUND = "NotFound"
    UNKNOWN_PROP = "UnknownProp"
    INVALID_TYPE = "InvalidType"
    INVALID_DATA = "InvalidData"
    PARSE_FAILED = "ParseFailed"
    IGNORE = "Ignore"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    def __str__(self) -> str:
        return self.message


_MESSAGES = {
    SkipReason.NONE: "No Reason",
    SkipReason.NOT_FOUND: "Not found",
    SkipReason.UNKNOWN_PROP: "Unknown Property",
    SkipReason.INVALID_TYPE: "Invalid Type",
    SkipReason.INVALID_DATA: "Invalid Data",
    SkipReason.PARSE_FAILED: "Parse Failed",
    SkipReason.IGNORE: "Ignore",
}


@dataclass
class Report:
    """Audit report for a single object."""

    ignored: set[str] = field(default_factory=set)
    skipped: dict[str, SkipReason] = field(default_factory=dict)
    parsed: set[str] = field(default_factory=set)

    def ignore(self, key: str) -> None:
        self.ignored.add(key)

    def skip(self, key: str, reason: SkipReason) -> None:
        self.skipped[key] = reason

    def mark_parsed(self, key: str) -> None:
        self.parsed.add(key)

    def audit_ignored(self, data: dict, ns: str | None = None) -> None:
        """Mark as ignored every key of ``data`` neither parsed nor skipped."""
        known = self.parsed | self.skipped.keys()
        for key in data.keys() - known:
            self.ignore(f"{ns}.{key}" if ns is not None else key)


@dataclass
class Reporter:
    """Audit of a whole library: one report per parsed file."""

    ignored: set[str] = field(default_factory=set)
    skipped: dict[str, SkipReason] = field(default_factory=dict)
    parsed: dict[str, Report] = field(default_factory=dict)

    def ignore(self, key: str) -> None:
        self.ignored.add(key)

    def skip(self, key: str, reason: SkipReason) -> None:
        self.skipped[key] = reason

    def add_parsed(self, key: str, report: Report) -> None:
        self.parsed[key] = report


def _audited(
    getter: Callable[[dict, str], T | None],
    data: dict,
    key: str,
    report: Report | None,
) -> T | None:
    value = getter(data, key)
    if report is not None:
        if value is not None:
            report.mark_parsed(key)
        else:
            report.skip(key, SkipReason.NOT_FOUND)
    return value


def audit_get_str_value(data: dict, key: str, report: Report | None) -> str | None:
    return _audited(plutils.get_str_value, data, key, report)


def audit_get_int_value(data: dict, key: str, report: Report | None) -> int | None:
    return _audited(plutils.get_int_value, data, key, report)


def audit_get_bool_value(data: dict, key: str, report: Report | None) -> bool | None:
    return _audited(plutils.get_bool_value, data, key, report)


def audit_get_dict_value(data: dict, key: str, report: Report | None) -> dict | None:
    return _audited(plutils.get_dict_value, data, key, report)


def audit_get_array_value(data: dict, key: str, report: Report | None) -> list[Any] | None:
    return _audited(plutils.get_array_value, data, key, report)


def audit_get_date_value(data: dict, key: str, report: Report | None):
    return _audited(plutils.get_date_value, data, key, report)


def audit_get_data_value(data: dict, key: str, report: Report | None) -> bytes | None:
    return _audited(plutils.get_data_value, data, key, report)