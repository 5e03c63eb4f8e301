"""Exif properties of a version and their mapping to XMP."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from aplib.audit import Report, SkipReason
from aplib.plutils import get_date_value, get_int_value
from aplib.xmp import (
    NS_DC,
    NS_EXIF,
    NS_EXIF_AUX,
    NS_TIFF,
    NS_XMP,
    ToXmp,
    Xmp,
    XmpError,
    XmpProperty,
    XmpTranslator,
)

ExifValue = Union[int, float, str, datetime]

_P = XmpProperty

EXIF_TO_XMP: dict[str, XmpProperty | XmpTranslator] = {
    "ApertureValue": _P(NS_EXIF, "ApertureValue"),
    "Artist": _P(NS_DC, "creator"),
    "CameraSerialNumber": _P(NS_EXIF_AUX, "SerialNumber"),
    "CaptureDayOfMonth": XmpTranslator.CUSTOM,
    "CaptureDayOfWeek": XmpTranslator.NONE,
    "CaptureHourOfDay": XmpTranslator.NONE,
    "CaptureMinuteOfHour": XmpTranslator.NONE,
    "CaptureMonthOfYear": XmpTranslator.NONE,
    "CaptureSecondOfMinute": XmpTranslator.NONE,
    "CaptureYear": XmpTranslator.NONE,
    "ColorSpace": _P(NS_EXIF, "ColorSpace"),
    "Copyright": _P(NS_DC, "rights"),
    "Contrast": _P(NS_EXIF, "Contrast"),
    "Depth": _P(NS_TIFF, "BitsPerSample"),
    "ExifVersion": _P(NS_EXIF, "ExifVersion"),
    "ExposureBiasValue": _P(NS_EXIF, "ExposureBiasValue"),
    "ExposureMode": _P(NS_EXIF, "ExposureMode"),
    "ExposureProgram": _P(NS_EXIF, "ExposureProgram"),
    "Firmware": _P(NS_EXIF_AUX, "Firmware"),
    "Flash": XmpTranslator.CUSTOM,
    "FlashExposureComp": _P(NS_EXIF_AUX, "FlashCompensation"),
    "FlashPixVersion": _P(NS_EXIF, "FlashPixVersion"),
    "FocalLength": _P(NS_EXIF, "FocalLength"),
    "FocusDistance": _P(NS_EXIF_AUX, "ApproximateFocusDistance"),
    "ISOSpeedRating": XmpTranslator.CUSTOM,
    "ImageDate": _P(NS_EXIF, "DateTimeOriginal"),
    # May be overwritten by IPTC later.
    "ImageDescription": _P(NS_DC, "description"),
    "Latitude": _P(NS_EXIF, "GPSLatitude"),
    "LensMaxMM": XmpTranslator.NONE,
    "LensMinMM": XmpTranslator.CUSTOM,
    "LensModel": _P(NS_EXIF_AUX, "Lens"),
    "LightSource": _P(NS_EXIF, "LightSource"),
    "Longitude": _P(NS_EXIF, "GPSLongitude"),
    "Make": _P(NS_TIFF, "Make"),
    "MaxApertureValue": _P(NS_EXIF, "MaxApertureValue"),
    "MeteringMode": _P(NS_EXIF, "MeteringMode"),
    "Model": _P(NS_TIFF, "Model"),
    "OwnerName": _P(NS_EXIF_AUX, "OwnerName"),
    "PixelHeight": _P(NS_EXIF, "PixelYDimension"),
    "PixelWidth": _P(NS_EXIF, "PixelXDimension"),
    "Saturation": _P(NS_EXIF, "Saturation"),
    "SceneCaptureType": _P(NS_EXIF, "SceneCaptureType"),
    "Sharpness": _P(NS_EXIF, "Sharpness"),
    "ShutterSpeed": _P(NS_EXIF, "ShutterSpeedValue"),
    "Software": _P(NS_XMP, "CreatorTool"),
    "WhiteBalance": _P(NS_EXIF, "SceneCaptureType"),
}


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _to_float(value: ExifValue | None) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _exif_value(data: dict, key: str) -> ExifValue | None:
    raw = data[key]
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return get_int_value(data, key)
    if isinstance(raw, (float, str)):
        return raw
    if isinstance(raw, datetime):
        return get_date_value(data, key)
    return None


def value_to_string(value: ExifValue) -> str | None:
    """String form of strings and integers; None for other values."""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass
class ExifProperties(ToXmp):
    """Exif values keyed by their property name."""

    bag: dict[str, ExifValue] = field(default_factory=dict)

    def _iso(self, xmp: Xmp) -> None:
        iso = self.bag.get("ISOSpeedRatings")
        if isinstance(iso, int) and not isinstance(iso, bool):
            try:
                xmp.set_array_item(NS_EXIF, "ISOSpeedRatings", 1, str(iso))
            except XmpError as err:
                print(f"Error converting ISO {err}")

    def _lens_info(self, xmp: Xmp) -> None:
        low = _to_float(self.bag.get("LensMinMM"))
        high = _to_float(self.bag.get("LensMaxMM"))
        if low is None or high is None:
            return
        value = f"{_format_number(low * 100.0)}/100 {_format_number(high * 100.0)}/100 0/1 0/1"
        try:
            xmp.set_property(NS_EXIF_AUX, "LensInfo", value)
        except XmpError as err:
            print(f"Error converting LensInfo {err}")

    def _custom(self, key: str, xmp: Xmp) -> None:
        if key == "ISOSpeedRatings":
            self._iso(xmp)
        elif key == "LensMinMM":
            self._lens_info(xmp)

    def to_xmp(self, xmp: Xmp) -> bool:
        for key in sorted(self.bag):
            translator = EXIF_TO_XMP.get(key)
            if isinstance(translator, XmpProperty):
                text = value_to_string(self.bag[key])
                if text is not None:
                    translator.put_into_xmp(text, xmp)
            elif translator is XmpTranslator.CUSTOM:
                self._custom(key, xmp)
        return True


def parse_exif(data: dict | None, report: Report | None) -> ExifProperties | None:
    """Build Exif properties from their plist dict, None when absent."""
    if data is None:
        return None
    values: dict[str, ExifValue] = {}
    for key in sorted(data):
        value = _exif_value(data, key)
        if value is not None:
            values[key] = value
            if report is not None and key not in EXIF_TO_XMP:
                report.skip(f"Exif.{key}", SkipReason.UNKNOWN_PROP)
        elif report is not None:
            report.skip(f"Exif.{key}", SkipReason.INVALID_TYPE)
    return ExifProperties(bag=values)