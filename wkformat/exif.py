"""EXIF tags and values attached to a WK image."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExifTag(Enum):
    """EXIF fields the format knows about."""

    MAKE = "Make"
    MODEL = "Model"
    SOFTWARE = "Software"
    DATE_TIME = "DateTime"
    DATE_TIME_ORIGINAL = "DateTimeOriginal"
    EXPOSURE_TIME = "ExposureTime"
    F_NUMBER = "FNumber"
    ISO_SPEED_RATINGS = "ISOSpeedRatings"
    FOCAL_LENGTH = "FocalLength"
    FOCAL_LENGTH_IN_35MM = "FocalLengthIn35mm"
    LENS_MODEL = "LensModel"
    ARTIST = "Artist"
    COPYRIGHT = "Copyright"
    IMAGE_DESCRIPTION = "ImageDescription"
    ORIENTATION = "Orientation"
    X_RESOLUTION = "XResolution"
    Y_RESOLUTION = "YResolution"
    GPS_LATITUDE = "GPSLatitude"
    GPS_LONGITUDE = "GPSLongitude"
    GPS_ALTITUDE = "GPSAltitude"
    IMAGE_WIDTH = "ImageWidth"
    IMAGE_HEIGHT = "ImageHeight"
    WHITE_BALANCE = "WhiteBalance"
    FLASH = "Flash"
    METERING_MODE = "MeteringMode"
    EXPOSURE_PROGRAM = "ExposureProgram"
    EXPOSURE_BIAS_VALUE = "ExposureBiasValue"
    COLOR_SPACE = "ColorSpace"


class ExifValueKind(Enum):
    """Type of an EXIF value."""

    STRING = "String"
    INT = "Int"
    UINT = "UInt"
    FLOAT = "Float"
    RATIONAL = "Rational"
    SRATIONAL = "SRational"
    BYTES = "Bytes"


@dataclass(frozen=True)
class ExifValue:
    """A typed EXIF value; rationals hold a (numerator, denominator) pair."""

    kind: ExifValueKind
    value: Any

    def as_string(self) -> str | None:
        """The text of a string value."""
        return self.value if self.kind is ExifValueKind.STRING else None

    def as_int(self) -> int | None:
        """The value of a signed or unsigned integer, as a signed 64-bit number."""
        if self.kind is ExifValueKind.INT:
            return self.value
        if self.kind is ExifValueKind.UINT:
            value = self.value & 0xFFFFFFFFFFFFFFFF
            return value - (1 << 64) if value >= 1 << 63 else value
        return None

    def as_float(self) -> float | None:
        """The value of a float or of a rational with a non-zero denominator."""
        if self.kind is ExifValueKind.FLOAT:
            return float(self.value)
        if self.kind in (ExifValueKind.RATIONAL, ExifValueKind.SRATIONAL):
            numerator, denominator = self.value
            if denominator != 0:
                return numerator / denominator
        return None


@dataclass
class ExifData:
    """A mapping of EXIF tags to values."""

    tags: dict[ExifTag, ExifValue] = field(default_factory=dict)

    def set(self, tag: ExifTag, value: ExifValue) -> None:
        """Store a value for a tag."""
        self.tags[tag] = value

    def get(self, tag: ExifTag) -> ExifValue | None:
        """The value for a tag, or None."""
        return self.tags.get(tag)

    def set_string(self, tag: ExifTag, value: str) -> None:
        self.set(tag, ExifValue(ExifValueKind.STRING, str(value)))

    def set_int(self, tag: ExifTag, value: int) -> None:
        self.set(tag, ExifValue(ExifValueKind.INT, int(value)))

    def set_float(self, tag: ExifTag, value: float) -> None:
        self.set(tag, ExifValue(ExifValueKind.FLOAT, float(value)))

    def set_rational(self, tag: ExifTag, numerator: int, denominator: int) -> None:
        self.set(tag, ExifValue(ExifValueKind.RATIONAL, (int(numerator), int(denominator))))

    def _string(self, tag: ExifTag) -> str | None:
        value = self.get(tag)
        return value.as_string() if value else None

    def _int(self, tag: ExifTag) -> int | None:
        value = self.get(tag)
        return value.as_int() if value else None

    def _float(self, tag: ExifTag) -> float | None:
        value = self.get(tag)
        return value.as_float() if value else None

    def camera_make(self) -> str | None:
        return self._string(ExifTag.MAKE)

    def camera_model(self) -> str | None:
        return self._string(ExifTag.MODEL)

    def date_time(self) -> str | None:
        return self._string(ExifTag.DATE_TIME)

    def iso(self) -> int | None:
        return self._int(ExifTag.ISO_SPEED_RATINGS)

    def focal_length(self) -> float | None:
        return self._float(ExifTag.FOCAL_LENGTH)

    def aperture(self) -> float | None:
        return self._float(ExifTag.F_NUMBER)

    def exposure_time(self) -> float | None:
        return self._float(ExifTag.EXPOSURE_TIME)

    def gps_coordinates(self) -> tuple[float, float] | None:
        """(latitude, longitude) when both are present."""
        lat = self._float(ExifTag.GPS_LATITUDE)
        lon = self._float(ExifTag.GPS_LONGITUDE)
        if lat is None or lon is None:
            return None
        return lat, lon

    def orientation(self) -> int | None:
        return self._int(ExifTag.ORIENTATION)

    @classmethod
    def builder(cls) -> ExifBuilder:
        """A builder for EXIF data."""
        return ExifBuilder()


class ExifBuilder:
    """Fluent construction of ExifData."""

    def __init__(self) -> None:
        self._data = ExifData()

    def make(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.MAKE, value)
        return self

    def model(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.MODEL, value)
        return self

    def software(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.SOFTWARE, value)
        return self

    def date_time(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.DATE_TIME, value)
        return self

    def iso(self, value: int) -> ExifBuilder:
        self._data.set_int(ExifTag.ISO_SPEED_RATINGS, value)
        return self

    def focal_length(self, mm: float) -> ExifBuilder:
        self._data.set_float(ExifTag.FOCAL_LENGTH, mm)
        return self

    def aperture(self, f_number: float) -> ExifBuilder:
        self._data.set_float(ExifTag.F_NUMBER, f_number)
        return self

    def exposure(self, seconds: float) -> ExifBuilder:
        self._data.set_float(ExifTag.EXPOSURE_TIME, seconds)
        return self

    def gps(self, lat: float, lon: float) -> ExifBuilder:
        self._data.set_float(ExifTag.GPS_LATITUDE, lat)
        self._data.set_float(ExifTag.GPS_LONGITUDE, lon)
        return self

    def artist(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.ARTIST, value)
        return self

    def copyright(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.COPYRIGHT, value)
        return self

    def description(self, value: str) -> ExifBuilder:
        self._data.set_string(ExifTag.IMAGE_DESCRIPTION, value)
        return self

    def orientation(self, value: int) -> ExifBuilder:
        self._data.set_int(ExifTag.ORIENTATION, value)
        return self

    def build(self) -> ExifData:
        """The EXIF data built so far."""
        return self._data