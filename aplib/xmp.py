"""A small in-memory XMP packet and property mapping helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

NS_DC = "http://purl.org/dc/elements/1.1/"
NS_IPTC4XMP = "http://iptc.org/std/Iptc4xmpCore/1.0/xmlns/"
NS_XMP = "http://ns.adobe.com/xap/1.0/"
NS_XMP_RIGHTS = "http://ns.adobe.com/xap/1.0/rights/"
NS_PHOTOSHOP = "http://ns.adobe.com/photoshop/1.0/"
NS_EXIF = "http://ns.adobe.com/exif/1.0/"
NS_EXIF_AUX = "http://ns.adobe.com/exif/1.0/aux/"
NS_TIFF = "http://ns.adobe.com/tiff/1.0/"

_PREFIXES = {
    NS_DC: "dc:",
    NS_IPTC4XMP: "Iptc4xmpCore:",
    NS_XMP: "xmp:",
    NS_XMP_RIGHTS: "xmpRights:",
    NS_PHOTOSHOP: "photoshop:",
    NS_EXIF: "exif:",
    NS_EXIF_AUX: "aux:",
    NS_TIFF: "tiff:",
}

ARRAY_LAST_ITEM = -1


class XmpError(Exception):
    """Raised on an invalid XMP operation."""


def namespace_prefix(ns: str) -> str:
    """Registered prefix for ``ns``, including the trailing colon."""
    try:
        return _PREFIXES[ns]
    except KeyError:
        raise XmpError(f"unregistered namespace {ns}") from None


class Xmp:
    """XMP metadata: simple properties and arrays keyed by namespace and path."""

    def __init__(self) -> None:
        self._props: dict[tuple[str, str], str | list[str]] = {}

    @staticmethod
    def _check(ns: str, name: str) -> None:
        namespace_prefix(ns)
        if not name:
            raise XmpError("empty property name")

    def set_property(self, ns: str, name: str, value: str) -> None:
        self._check(ns, name)
        self._props[(ns, name)] = str(value)

    def get_property(self, ns: str, name: str) -> str | None:
        value = self._props.get((ns, name))
        return value if isinstance(value, str) else None

    def set_array_item(self, ns: str, name: str, index: int, value: str) -> None:
        """Set the 1-based item ``index``; ``len + 1`` appends."""
        self._check(ns, name)
        current = self._props.get((ns, name))
        if current is None:
            items: list[str] = []
        elif isinstance(current, list):
            items = list(current)
        else:
            raise XmpError(f"{name} is not an array")
        if index == ARRAY_LAST_ITEM:
            index = len(items)
        if 1 <= index <= len(items):
            items[index - 1] = str(value)
        elif index == len(items) + 1:
            items.append(str(value))
        else:
            raise XmpError("Array index out of bounds")
        self._props[(ns, name)] = items

    def get_array_item(self, ns: str, name: str, index: int) -> str | None:
        items = self._props.get((ns, name))
        if not isinstance(items, list):
            return None
        if index == ARRAY_LAST_ITEM:
            index = len(items)
        if 1 <= index <= len(items):
            return items[index - 1]
        return None


@dataclass(frozen=True)
class XmpProperty:
    """An XMP property, optionally an array item or a struct field."""

    ns: str
    name: str
    index: int | None = None
    field: XmpProperty | None = None

    def put_into_xmp(self, value: str, xmp: Xmp) -> bool:
        """Store ``value`` into ``xmp``; True on success."""
        try:
            if self.index is None and self.field is None:
                xmp.set_property(self.ns, self.name, value)
            elif self.field is not None:
                prefix = namespace_prefix(self.field.ns)
                path = f"{self.name}/{prefix}{self.field.name}"
                xmp.set_property(self.ns, path, value)
            else:
                xmp.set_array_item(self.ns, self.name, self.index, value)
        except XmpError:
            return False
        return True


class XmpTranslator(Enum):
    """How a source property that has no plain XMP property is handled."""

    CUSTOM = "custom"
    NONE = "none"


class ToXmp(ABC):
    """Objects that can push their properties into XMP."""

    @abstractmethod
    def to_xmp(self, xmp: Xmp) -> bool:
        """Push the object properties into ``xmp``."""