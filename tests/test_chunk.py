import io
import struct

import pytest

from wkformat.chunk import (
    MAGIC,
    Chunk,
    ChunkReader,
    ChunkType,
    ChunkWriter,
    compute_crc,
)
from wkformat.errors import (
    CrcMismatchError,
    InvalidChunkError,
    InvalidFormatError,
    WkError,
)


def _write(chunks):
    buffer = io.BytesIO()
    writer = ChunkWriter(buffer)
    for chunk in chunks:
        writer.write_chunk(chunk)
    return writer.finish().getvalue()


def test_writer_starts_with_format_magic():
    buffer = io.BytesIO()
    ChunkWriter(buffer).write_magic()
    assert buffer.getvalue() == b"WK3.0\x00\x00\x00"
    assert buffer.getvalue() == MAGIC


@pytest.mark.parametrize("kind", list(ChunkType))
def test_tag_round_trip(kind):
    assert ChunkType.from_tag(kind.tag()) is kind
    assert ChunkType.from_code(int(kind)) is kind
    assert len(kind.tag()) == 4


def test_known_tags_and_codes():
    assert ChunkType.IMAGE_HEADER.tag() == b"IHDR"
    assert ChunkType.XMP.tag() == b"XMP\x00"
    assert ChunkType.from_code(0x11) is ChunkType.IMAGE_DATA_LOSSY
    assert ChunkType.from_code(0xFF) is ChunkType.END


def test_unknown_code_and_tag_raise():
    with pytest.raises(InvalidChunkError):
        ChunkType.from_code(0x42)
    with pytest.raises(InvalidChunkError):
        ChunkType.from_tag(b"ZZZZ")


def test_chunk_computes_crc():
    chunk = Chunk(ChunkType.EXIF, b"payload")
    assert chunk.crc == compute_crc(ChunkType.EXIF, b"payload")
    assert chunk.verify_crc()
    chunk.data = b"tampered"
    assert not chunk.verify_crc()


def test_crc_depends_on_type():
    assert compute_crc(ChunkType.EXIF, b"abc") != compute_crc(ChunkType.XMP, b"abc")


def test_wire_layout_of_single_chunk():
    chunk = Chunk(ChunkType.IMAGE_HEADER, b"abc")
    buffer = io.BytesIO()
    ChunkWriter(buffer).write_chunk(chunk)
    expected = MAGIC + b"IHDR" + struct.pack("<I", 3) + b"abc" + struct.pack("<I", chunk.crc)
    assert buffer.getvalue() == expected


def test_round_trip_chunks():
    originals = [
        Chunk(ChunkType.IMAGE_HEADER, bytes(range(16))),
        Chunk(ChunkType.CUSTOM, b""),
        Chunk(ChunkType.IMAGE_DATA, b"\x00\xff" * 50),
    ]
    data = _write(originals)
    chunks = ChunkReader(io.BytesIO(data)).read_all_chunks()
    assert [c.chunk_type for c in chunks] == [
        ChunkType.IMAGE_HEADER,
        ChunkType.CUSTOM,
        ChunkType.IMAGE_DATA,
        ChunkType.END,
    ]
    assert [c.data for c in chunks[:3]] == [c.data for c in originals]
    assert chunks[-1].data == b""


def test_empty_stream_has_only_end():
    data = _write([])
    assert data.startswith(MAGIC)
    chunks = ChunkReader(io.BytesIO(data)).read_all_chunks()
    assert [c.chunk_type for c in chunks] == [ChunkType.END]


def test_bad_magic_raises():
    data = b"XX3.0\x00\x00\x00" + _write([])[len(MAGIC):]
    with pytest.raises(InvalidFormatError):
        ChunkReader(io.BytesIO(data)).read_chunk()


def test_corrupted_payload_raises_crc_mismatch():
    data = bytearray(_write([Chunk(ChunkType.IMAGE_DATA, b"hello world")]))
    offset = len(MAGIC) + 8
    data[offset] ^= 0xFF
    with pytest.raises(CrcMismatchError) as info:
        ChunkReader(io.BytesIO(bytes(data))).read_all_chunks()
    assert info.value.expected != info.value.actual


def test_unknown_tag_in_stream_raises():
    data = MAGIC + b"ABCD" + struct.pack("<I", 0) + struct.pack("<I", 0)
    with pytest.raises(InvalidChunkError):
        ChunkReader(io.BytesIO(data)).read_chunk()


def test_truncated_stream_raises():
    data = _write([Chunk(ChunkType.IMAGE_DATA, b"0123456789")])
    with pytest.raises(WkError):
        ChunkReader(io.BytesIO(data[:-12])).read_all_chunks()


def test_verify_magic_then_read():
    data = _write([Chunk(ChunkType.THUMBNAIL, b"t")])
    reader = ChunkReader(io.BytesIO(data))
    reader.verify_magic()
    assert reader.magic_verified
    chunk = reader.read_chunk()
    assert chunk.chunk_type is ChunkType.THUMBNAIL
    assert chunk.data == b"t"