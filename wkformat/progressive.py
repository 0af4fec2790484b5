"""Tiling, coefficient scan orders and resync markers for progressive decoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

AC_LOW_INDICES: tuple[int, ...] = (1, 2, 3, 8, 9, 10, 16, 17, 18, 24, 25, 32, 33, 40, 48)
AC_HIGH_INDICES: tuple[int, ...] = tuple(
    i for i in range(64) if i != 0 and i not in AC_LOW_INDICES
)

RESYNC_MARKER = bytes([0xFF, 0xD0, 0x00, 0x00])


@dataclass
class Tile:
    """A rectangular region of the image and where its data lives."""

    x: int
    y: int
    width: int
    height: int
    data_offset: int = 0
    data_size: int = 0


class TileGrid:
    """An image split into square tiles in row-major order."""

    def __init__(self, image_width: int, image_height: int, tile_size: int) -> None:
        if tile_size <= 0:
            raise ValueError("Tile size must be positive")
        self.tile_width = tile_size
        self.tile_height = tile_size
        self.cols = -(-image_width // tile_size)
        self.rows = -(-image_height // tile_size)
        self.tiles = [
            Tile(
                x=col * tile_size,
                y=row * tile_size,
                width=min(image_width - col * tile_size, tile_size),
                height=min(image_height - row * tile_size, tile_size),
            )
            for row in range(self.rows)
            for col in range(self.cols)
        ]

    def get_tile(self, x: int, y: int) -> Tile | None:
        """The tile covering pixel (x, y), or None when outside the grid."""
        if x < 0 or y < 0:
            return None
        col = x // self.tile_width
        row = y // self.tile_height
        if col < self.cols and row < self.rows:
            return self.tiles[row * self.cols + col]
        return None

    def tile_count(self) -> int:
        """Number of tiles in the grid."""
        return len(self.tiles)


class ScanOrder:
    """An ordering of coefficient indices."""

    def __init__(self, order: Sequence[int]) -> None:
        self.order = tuple(order)

    @classmethod
    def sequential(cls, count: int) -> ScanOrder:
        """Indices 0 to count - 1 in order."""
        return cls(range(count))

    @classmethod
    def dc_first_8x8(cls) -> ScanOrder:
        """The DC coefficient followed by the 63 AC coefficients."""
        return cls(range(64))

    @classmethod
    def progressive_8x8(cls) -> ScanOrder:
        """DC, then low-frequency AC, then the remaining AC coefficients."""
        return cls((0, *AC_LOW_INDICES, *AC_HIGH_INDICES))

    def __iter__(self) -> Iterator[int]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self.order)


class ScanPass(Enum):
    """Which coefficients a progressive pass carries."""

    DC = "DC"
    AC_LOW = "ACLow"
    AC_HIGH = "ACHigh"
    ALL = "All"


def _check_block(coeffs: Sequence[int]) -> None:
    if len(coeffs) != 64:
        raise ValueError(f"Expected 64 coefficients, got {len(coeffs)}")


def reorder_coefficients(coeffs: Sequence[int], scan_pass: ScanPass) -> list[int]:
    """Pick the coefficients of an 8x8 block that belong to a pass."""
    _check_block(coeffs)
    if scan_pass is ScanPass.DC:
        return [coeffs[0]]
    if scan_pass is ScanPass.AC_LOW:
        return [coeffs[i] for i in AC_LOW_INDICES]
    if scan_pass is ScanPass.AC_HIGH:
        return [coeffs[i] for i in AC_HIGH_INDICES]
    return list(coeffs)


def merge_progressive_coefficients(
    dc: Sequence[int], ac_low: Sequence[int], ac_high: Sequence[int]
) -> list[int]:
    """Rebuild an 8x8 block from its passes; missing values stay zero."""
    coeffs = [0] * 64
    if dc:
        coeffs[0] = dc[0]
    for idx, value in zip(AC_LOW_INDICES, ac_low):
        coeffs[idx] = value
    for idx, value in zip(AC_HIGH_INDICES, ac_high):
        coeffs[idx] = value
    return coeffs


def insert_resync_marker(data: bytes, interval: int) -> bytes:
    """Return data with resync markers inserted every interval bytes."""
    if interval < 0:
        raise ValueError("Interval must not be negative")
    data = bytes(data)
    out = bytearray()
    previous = 0
    for pos in range(interval, len(data), interval + 4):
        out += data[previous:pos]
        out += RESYNC_MARKER
        previous = pos
    out += data[previous:]
    return bytes(out)


def find_resync_marker(data: bytes, start: int) -> int | None:
    """Offset of the first resync marker at or after start, or None."""
    if start < 0:
        raise ValueError("Start must not be negative")
    pos = bytes(data).find(RESYNC_MARKER, start)
    return None if pos < 0 else pos