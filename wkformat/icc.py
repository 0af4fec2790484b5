"""Colour profile description carried by WK images."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ColorSpace(Enum):
    """Colour space named by a profile."""

    SRGB = "SRGB"
    ADOBE_RGB = "AdobeRGB"
    PROPHOTO_RGB = "ProPhotoRGB"
    DISPLAY_P3 = "DisplayP3"
    REC709 = "Rec709"
    REC2020 = "Rec2020"
    CMYK = "CMYK"
    GRAYSCALE = "Grayscale"
    LAB = "Lab"
    CUSTOM = "Custom"


class RenderingIntent(Enum):
    """How out-of-gamut colours are mapped."""

    PERCEPTUAL = "Perceptual"
    RELATIVE_COLORIMETRIC = "RelativeColorimetric"
    SATURATION = "Saturation"
    ABSOLUTE_COLORIMETRIC = "AbsoluteColorimetric"


_WIDE_GAMUT = frozenset(
    {
        ColorSpace.ADOBE_RGB,
        ColorSpace.PROPHOTO_RGB,
        ColorSpace.DISPLAY_P3,
        ColorSpace.REC2020,
    }
)


@dataclass
class IccProfile:
    """An ICC colour profile; the defaults describe sRGB."""

    color_space: ColorSpace = ColorSpace.SRGB
    rendering_intent: RenderingIntent = RenderingIntent.PERCEPTUAL
    profile_name: str = "sRGB IEC61966-2.1"
    description: str = "sRGB color space profile"
    raw_data: bytes | None = None

    @classmethod
    def srgb(cls) -> IccProfile:
        """The sRGB profile."""
        return cls()

    @classmethod
    def adobe_rgb(cls) -> IccProfile:
        """The Adobe RGB (1998) profile."""
        return cls(
            ColorSpace.ADOBE_RGB,
            RenderingIntent.RELATIVE_COLORIMETRIC,
            "Adobe RGB (1998)",
            "Adobe RGB color space profile",
        )

    @classmethod
    def display_p3(cls) -> IccProfile:
        """The Display P3 profile."""
        return cls(
            ColorSpace.DISPLAY_P3,
            RenderingIntent.PERCEPTUAL,
            "Display P3",
            "Apple Display P3 color space",
        )

    @classmethod
    def prophoto_rgb(cls) -> IccProfile:
        """The ProPhoto RGB profile."""
        return cls(
            ColorSpace.PROPHOTO_RGB,
            RenderingIntent.RELATIVE_COLORIMETRIC,
            "ProPhoto RGB",
            "ProPhoto RGB color space for wide gamut",
        )

    @classmethod
    def rec2020(cls) -> IccProfile:
        """The ITU-R BT.2020 profile."""
        return cls(
            ColorSpace.REC2020,
            RenderingIntent.PERCEPTUAL,
            "ITU-R BT.2020",
            "Rec. 2020 HDR color space",
        )

    @classmethod
    def from_raw(cls, data: bytes) -> IccProfile:
        """Wrap an embedded profile given as raw bytes."""
        return cls(
            ColorSpace.CUSTOM,
            RenderingIntent.PERCEPTUAL,
            "Custom ICC Profile",
            "Embedded ICC profile",
            bytes(data),
        )

    def is_wide_gamut(self) -> bool:
        """True for colour spaces larger than sRGB."""
        return self.color_space in _WIDE_GAMUT

    def is_hdr(self) -> bool:
        """True for the Rec. 2020 colour space."""
        return self.color_space is ColorSpace.REC2020