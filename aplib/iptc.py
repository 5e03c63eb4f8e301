"""IPTC properties of a version and their mapping to XMP."""

from __future__ import annotations

from dataclasses import dataclass, field

from aplib.audit import Report, SkipReason
from aplib.xmp import (
    NS_DC,
    NS_IPTC4XMP,
    NS_PHOTOSHOP,
    NS_XMP,
    NS_XMP_RIGHTS,
    ToXmp,
    Xmp,
    XmpProperty,
)


def _contact(name: str) -> XmpProperty:
    return XmpProperty(
        NS_IPTC4XMP, "CreatorContactInfo", field=XmpProperty(NS_IPTC4XMP, name)
    )


IPTC_TO_XMP: dict[str, XmpProperty] = {
    "Byline": XmpProperty(NS_DC, "creator"),
    "BylineTitle": XmpProperty(NS_PHOTOSHOP, "AuthorsPosition"),
    "Caption/Abstract": XmpProperty(NS_DC, "description"),
    "CiAdrCity": _contact("CiAdrCity"),
    "CiAdrCtry": _contact("CiAdrCtry"),
    "CiAdrExtadr": _contact("CiAdrExtadr"),
    "CiAdrPcode": _contact("CiAdrPcode"),
    "CiAdrRegion": _contact("CiAdrRegion"),
    "CiEmailWork": _contact("CiEmailWork"),
    "CiTelWork": _contact("CiTelWork"),
    "City": XmpProperty(NS_PHOTOSHOP, "City"),
    "CiUrlWork": _contact("CiUrlWork"),
    "CopyrightNotice": XmpProperty(NS_DC, "rights"),
    "Country/PrimaryLocationCode": XmpProperty(NS_IPTC4XMP, "CountryCode"),
    "Country/PrimaryLocationName": XmpProperty(NS_PHOTOSHOP, "Country"),
    "Credit": XmpProperty(NS_PHOTOSHOP, "Credit"),
    "Headline": XmpProperty(NS_PHOTOSHOP, "Headline"),
    "Keywords": XmpProperty(NS_DC, "subject"),
    "ObjectAttributeReference": XmpProperty(NS_IPTC4XMP, "IntellectualGenre"),
    "ObjectName": XmpProperty(NS_DC, "title"),
    "OriginalTransmissionReference": XmpProperty(NS_PHOTOSHOP, "TransmissionReference"),
    "Province/State": XmpProperty(NS_PHOTOSHOP, "State"),
    "Scene": XmpProperty(NS_IPTC4XMP, "Scene"),
    "Source": XmpProperty(NS_PHOTOSHOP, "Source"),
    "SpecialInstructions": XmpProperty(NS_PHOTOSHOP, "Instructions"),
    "SubjectReference": XmpProperty(NS_IPTC4XMP, "SubjectReference"),
    "SubLocation": XmpProperty(NS_IPTC4XMP, "Location"),
    "StarRating": XmpProperty(NS_XMP, "Rating"),
    "UsageTerms": XmpProperty(NS_XMP_RIGHTS, "UsageTerms"),
    "Writer/Editor": XmpProperty(NS_PHOTOSHOP, "CaptionWriter"),
}


@dataclass
class IptcProperties(ToXmp):
    """IPTC string values keyed by their property name."""

    bag: dict[str, str] = field(default_factory=dict)

    def to_xmp(self, xmp: Xmp) -> bool:
        for key in sorted(self.bag):
            prop = IPTC_TO_XMP.get(key)
            if prop is not None:
                prop.put_into_xmp(self.bag[key], xmp)
        return True


def parse_iptc(data: dict | None, report: Report | None) -> IptcProperties | None:
    """Build IPTC properties from their plist dict, None when absent."""
    if data is None:
        return None
    values: dict[str, str] = {}
    for key in sorted(data):
        value = data[key]
        if isinstance(value, str):
            values[key] = value
            if report is not None and key not in IPTC_TO_XMP:
                report.skip(f"Iptc.{key}", SkipReason.UNKNOWN_PROP)
        elif report is not None:
            report.skip(f"Iptc.{key}", SkipReason.INVALID_TYPE)
    return IptcProperties(bag=values)