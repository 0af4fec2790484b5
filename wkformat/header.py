"""Image header chunk of the WK format."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from .errors import EncodingError, InvalidFormatError

_LAYOUT = struct.Struct("<IIBBBBBBH")
HEADER_SIZE = _LAYOUT.size


class ColorType(IntEnum):
    """Pixel layout of the stored image."""

    GRAYSCALE = 0
    GRAYSCALE_ALPHA = 1
    RGB = 2
    RGBA = 3
    YUV420 = 4
    YUV444 = 5

    @classmethod
    def from_code(cls, value: int) -> ColorType:
        """Return the colour type with the given numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(f"Unknown color type: {value}") from None

    def channels(self) -> int:
        """Number of bytes per pixel."""
        if self is ColorType.GRAYSCALE:
            return 1
        if self is ColorType.GRAYSCALE_ALPHA:
            return 2
        if self is ColorType.RGBA:
            return 4
        return 3

    def has_alpha(self) -> bool:
        """True when the layout carries an alpha channel."""
        return self in (ColorType.GRAYSCALE_ALPHA, ColorType.RGBA)


class CompressionMode(IntEnum):
    """How the pixel data is compressed."""

    LOSSLESS = 0
    LOSSY = 1
    MIXED = 2

    @classmethod
    def from_code(cls, value: int) -> CompressionMode:
        """Return the compression mode with the given numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(f"Unknown compression mode: {value}") from None


@dataclass
class WkHeader:
    """Dimensions and coding parameters of a WK image."""

    width: int
    height: int
    color_type: ColorType
    compression_mode: CompressionMode = CompressionMode.LOSSY
    quality: int = 85
    has_alpha: bool = False
    has_animation: bool = False
    bit_depth: int = 8

    @classmethod
    def new(cls, width: int, height: int, color_type: ColorType) -> WkHeader:
        """A lossy header at quality 85."""
        return cls(
            width,
            height,
            color_type,
            CompressionMode.LOSSY,
            85,
            color_type.has_alpha(),
        )

    @classmethod
    def lossless(cls, width: int, height: int, color_type: ColorType) -> WkHeader:
        """A lossless header at quality 100."""
        return cls(
            width,
            height,
            color_type,
            CompressionMode.LOSSLESS,
            100,
            color_type.has_alpha(),
        )

    def encode(self) -> bytes:
        """Serialise to the 16-byte wire form."""
        flags = int(self.has_alpha) | (int(self.has_animation) << 1)
        try:
            return _LAYOUT.pack(
                self.width,
                self.height,
                int(self.color_type),
                int(self.compression_mode),
                self.quality,
                flags,
                self.bit_depth,
                0,
                0,
            )
        except struct.error as exc:
            raise EncodingError(f"Header field out of range: {exc}") from None

    @classmethod
    def decode(cls, data: bytes) -> WkHeader:
        """Parse the wire form; extra trailing bytes are ignored."""
        if len(data) < HEADER_SIZE:
            raise InvalidFormatError("Header too short")
        width, height, color, mode, quality, flags, bit_depth, _, _ = _LAYOUT.unpack_from(data)
        return cls(
            width=width,
            height=height,
            color_type=ColorType.from_code(color),
            compression_mode=CompressionMode.from_code(mode),
            quality=quality,
            has_alpha=bool(flags & 0x01),
            has_animation=bool(flags & 0x02),
            bit_depth=bit_depth,
        )

    def pixel_count(self) -> int:
        """Number of pixels in the image."""
        return self.width * self.height

    def raw_size(self) -> int:
        """Size in bytes of the uncompressed pixel data."""
        return self.pixel_count() * self.color_type.channels()