"""Chunk container layer of the WK file format."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO

from .errors import CrcMismatchError, InvalidChunkError, InvalidFormatError, WkError

VERSION = "3.1.1"
MAGIC = b"WK3.0\x00\x00\x00"

_U32 = struct.Struct("<I")


class ChunkType(IntEnum):
    """Kinds of chunk that can appear in a WK stream."""

    IMAGE_HEADER = 0x01
    ICC_PROFILE = 0x02
    EXIF = 0x03
    XMP = 0x04
    THUMBNAIL = 0x05
    ANIMATION = 0x06
    IMAGE_DATA = 0x10
    IMAGE_DATA_LOSSY = 0x11
    FRAME_DATA = 0x12
    CUSTOM = 0xFE
    END = 0xFF

    @classmethod
    def from_code(cls, value: int) -> ChunkType:
        """Return the chunk type with the given numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidChunkError(f"Unknown chunk type: {value:#04x}") from None

    @classmethod
    def from_tag(cls, tag: bytes) -> ChunkType:
        """Return the chunk type with the given four-byte tag."""
        try:
            return _BY_TAG[bytes(tag)]
        except KeyError:
            text = bytes(tag).decode("utf-8", "replace")
            raise InvalidChunkError(f'Unknown chunk: "{text}"') from None

    def tag(self) -> bytes:
        """The four-byte tag written on the wire."""
        return _TAGS[self]


_TAGS = {
    ChunkType.IMAGE_HEADER: b"IHDR",
    ChunkType.ICC_PROFILE: b"ICCP",
    ChunkType.EXIF: b"EXIF",
    ChunkType.XMP: b"XMP\x00",
    ChunkType.THUMBNAIL: b"THUM",
    ChunkType.ANIMATION: b"ANIM",
    ChunkType.IMAGE_DATA: b"IDAT",
    ChunkType.IMAGE_DATA_LOSSY: b"IDLS",
    ChunkType.FRAME_DATA: b"FRMD",
    ChunkType.CUSTOM: b"CUST",
    ChunkType.END: b"IEND",
}
_BY_TAG = {tag: kind for kind, tag in _TAGS.items()}


def compute_crc(chunk_type: ChunkType, data: bytes) -> int:
    """CRC-32 over the chunk tag followed by its payload."""
    return zlib.crc32(bytes(data), zlib.crc32(chunk_type.tag())) & 0xFFFFFFFF


@dataclass
class Chunk:
    """A typed payload with its checksum; the checksum is computed when omitted."""

    chunk_type: ChunkType
    data: bytes = b""
    crc: int | None = field(default=None)

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        if self.crc is None:
            self.crc = compute_crc(self.chunk_type, self.data)

    def verify_crc(self) -> bool:
        """True when the stored checksum matches the contents."""
        return compute_crc(self.chunk_type, self.data) == self.crc


class ChunkReader:
    """Reads chunks from a binary stream, checking the magic number first."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.magic_verified = False

    def _read_exact(self, size: int) -> bytes:
        data = self.stream.read(size) if size else b""
        if len(data) != size:
            raise WkError("IO error: unexpected end of stream")
        return data

    def verify_magic(self) -> None:
        """Consume the magic number, raising if it is not a WK v3.0 file."""
        if self._read_exact(len(MAGIC)) != MAGIC:
            raise InvalidFormatError("Invalid magic number. Not a WK v3.0 file.")
        self.magic_verified = True

    def read_chunk(self) -> Chunk:
        """Read and validate the next chunk."""
        if not self.magic_verified:
            self.verify_magic()
        chunk_type = ChunkType.from_tag(self._read_exact(4))
        (size,) = _U32.unpack(self._read_exact(4))
        data = self._read_exact(size)
        (crc,) = _U32.unpack(self._read_exact(4))
        chunk = Chunk(chunk_type, data, crc)
        if not chunk.verify_crc():
            raise CrcMismatchError(crc, compute_crc(chunk_type, data))
        return chunk

    def read_all_chunks(self) -> list[Chunk]:
        """Read chunks up to and including the end chunk."""
        chunks = []
        while True:
            chunk = self.read_chunk()
            chunks.append(chunk)
            if chunk.chunk_type is ChunkType.END:
                return chunks


class ChunkWriter:
    """Writes chunks to a binary stream, emitting the magic number first."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.magic_written = False

    def write_magic(self) -> None:
        """Write the magic number."""
        self.stream.write(MAGIC)
        self.magic_written = True

    def write_chunk(self, chunk: Chunk) -> None:
        """Write one chunk: tag, length, payload and checksum."""
        if not self.magic_written:
            self.write_magic()
        self.stream.write(chunk.chunk_type.tag())
        self.stream.write(_U32.pack(len(chunk.data)))
        self.stream.write(chunk.data)
        self.stream.write(_U32.pack(chunk.crc))

    def write_end(self) -> None:
        """Write the terminating end chunk."""
        self.write_chunk(Chunk(ChunkType.END))

    def finish(self) -> BinaryIO:
        """Write the end chunk and hand back the underlying stream."""
        self.write_end()
        return self.stream