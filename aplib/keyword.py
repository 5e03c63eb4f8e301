"""Keywords of a library, loaded from the keywords plist."""

from __future__ import annotations

import os
from dataclasses import dataclass

from aplib.audit import Report, audit_get_int_value
from aplib.model import AplibObject, AplibType
from aplib.plutils import get_array_value, get_int_value, get_str_value, parse_plist


@dataclass
class Keyword(AplibObject):
    """A keyword; its children have this keyword's uuid as parent."""

    uuid: str | None = None
    model_id: int | None = None
    parent_uuid: str | None = None
    name: str | None = None
    children: list[Keyword] | None = None

    def obj_type(self) -> AplibType:
        return AplibType.KEYWORD

    def parent(self) -> str | None:
        return self.parent_uuid


def keyword_from_dict(data: dict) -> Keyword:
    """Build a keyword and, recursively, its children."""
    return Keyword(
        uuid=get_str_value(data, "uuid"),
        model_id=get_int_value(data, "modelId"),
        parent_uuid=get_str_value(data, "parentUuid"),
        name=get_str_value(data, "name"),
        children=keywords_from_array(get_array_value(data, "zChildren")),
    )


def keywords_from_array(array: list | None) -> list[Keyword] | None:
    """Keywords from a plist array; elements that aren't dicts are dropped."""
    if array is None:
        return None
    return [keyword_from_dict(item) for item in array if isinstance(item, dict)]


def parse_keywords(path: str | os.PathLike, report: Report | None) -> list[Keyword] | None:
    """Parse the keywords plist at ``path``."""
    plist = parse_plist(path)
    if not isinstance(plist, dict):
        return None
    version = audit_get_int_value(plist, "keywords_version", report)
    if version is None:
        return None
    if version not in (6, 7):
        print(f"Wrong keyword version {version} !")
    return keywords_from_array(get_array_value(plist, "keywords"))