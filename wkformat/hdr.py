"""HDR metadata, transfer functions and bit-depth conversion."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

_PQ_M1 = 0.1593017578125
_PQ_M2 = 78.84375
_PQ_C1 = 0.8359375
_PQ_C2 = 18.8515625
_PQ_C3 = 18.6875

_HLG_A = 0.17883277
_HLG_B = 0.28466892
_HLG_C = 0.55991073


class TransferFunction(Enum):
    """Electro-optical transfer function of the stored signal."""

    SDR = "SDR"
    PQ = "PQ"
    HLG = "HLG"
    LINEAR = "Linear"


class ColorGamut(Enum):
    """Primaries the colour values refer to."""

    SRGB = "SRGB"
    ADOBE_RGB = "AdobeRGB"
    DISPLAY_P3 = "DisplayP3"
    REC2020 = "Rec2020"
    PROPHOTO_RGB = "ProPhotoRGB"


@dataclass
class MasteringDisplay:
    """Colour volume of the display the content was mastered on."""

    red_primary: tuple[float, float]
    green_primary: tuple[float, float]
    blue_primary: tuple[float, float]
    white_point: tuple[float, float]
    max_luminance: float
    min_luminance: float


@dataclass
class HDRMetadata:
    """Dynamic-range description of an image; defaults describe 8-bit SDR sRGB."""

    bit_depth: int = 8
    transfer: TransferFunction = TransferFunction.SDR
    gamut: ColorGamut = ColorGamut.SRGB
    max_cll: int | None = None
    max_fall: int | None = None
    mastering_display: MasteringDisplay | None = None

    @classmethod
    def sdr(cls) -> HDRMetadata:
        """Standard dynamic range, 8-bit sRGB."""
        return cls()

    @classmethod
    def hdr10(cls) -> HDRMetadata:
        """HDR10: 10-bit PQ in Rec. 2020 with content light levels."""
        return cls(
            bit_depth=10,
            transfer=TransferFunction.PQ,
            gamut=ColorGamut.REC2020,
            max_cll=1000,
            max_fall=400,
        )

    @classmethod
    def hlg(cls) -> HDRMetadata:
        """Hybrid log-gamma, 10-bit Rec. 2020."""
        return cls(
            bit_depth=10,
            transfer=TransferFunction.HLG,
            gamut=ColorGamut.REC2020,
        )


def _powf(base: float, exponent: float) -> float:
    """Power that yields NaN instead of raising for undefined real results."""
    if math.isnan(base) or math.isnan(exponent):
        return math.nan
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def pq_eotf(v: float) -> float:
    """Map a PQ signal value to normalised linear light."""
    v_m2 = _powf(v, 1.0 / _PQ_M2)
    diff = v_m2 - _PQ_C1
    num = 0.0 if math.isnan(diff) else max(diff, 0.0)
    den = _PQ_C2 - _PQ_C3 * v_m2
    if den == 0.0:
        ratio = math.nan if num == 0.0 else math.copysign(math.inf, num)
    else:
        ratio = num / den
    return _powf(ratio, 1.0 / _PQ_M1)


def pq_oetf(l: float) -> float:
    """Map normalised linear light to a PQ signal value."""
    l_m1 = _powf(l, _PQ_M1)
    num = _PQ_C1 + _PQ_C2 * l_m1
    den = 1.0 + _PQ_C3 * l_m1
    if den == 0.0:
        return math.nan
    return _powf(num / den, _PQ_M2)


def hlg_eotf(v: float) -> float:
    """Map an HLG signal value to linear light."""
    if v <= 0.5:
        return (v * v) / 3.0
    try:
        return math.exp((v - _HLG_C) / _HLG_A + _HLG_B) / 12.0
    except OverflowError:
        return math.inf


def hlg_oetf(l: float) -> float:
    """Map linear light to an HLG signal value."""
    if l <= 1.0 / 12.0:
        scaled = 3.0 * l
        return math.sqrt(scaled) if scaled >= 0.0 else math.nan
    return _HLG_A * math.log(12.0 * l - _HLG_B) + _HLG_C


def convert_bit_depth(value: int, from_bits: int, to_bits: int) -> int:
    """Rescale an integer sample between bit depths with rounding."""
    if from_bits == to_bits:
        return value
    if not 1 <= from_bits <= 32 or not 0 <= to_bits <= 32:
        raise ValueError(f"Unsupported bit depth conversion: {from_bits} -> {to_bits}")
    from_max = (1 << from_bits) - 1
    to_max = (1 << to_bits) - 1
    return ((value * to_max + from_max // 2) // from_max) & 0xFFFF


def expand_to_16bit(data: bytes, bit_depth: int) -> list[int]:
    """Unpack samples of the given depth into left-aligned 16-bit values.

    Incomplete trailing groups of packed 10- and 12-bit data are dropped.
    """
    data = bytes(data)
    if bit_depth == 8:
        return [(b << 8) | b for b in data]
    if bit_depth == 10:
        out = []
        for start in range(0, len(data) - 4, 5):
            *highs, lows = data[start : start + 5]
            for shift, high in zip((6, 4, 2, 0), highs):
                out.append((((high << 2) | ((lows >> shift) & 0x03)) << 6) & 0xFFFF)
        return out
    if bit_depth == 12:
        out = []
        for start in range(0, len(data) - 2, 3):
            a, b, packed = data[start : start + 3]
            out.append((((a << 4) | (packed >> 4)) << 4) & 0xFFFF)
            out.append((((b << 4) | (packed & 0x0F)) << 4) & 0xFFFF)
        return out
    if bit_depth == 16:
        usable = len(data) - len(data) % 2
        return [int.from_bytes(data[i : i + 2], "little") for i in range(0, usable, 2)]
    return [b << 8 for b in data]


def compress_to_8bit(data: Iterable[int], bit_depth: int) -> bytes:
    """Reduce 16-bit samples to 8 bits by keeping the high byte."""
    return bytes((v >> 8) & 0xFF for v in data)