# wkformat

`wkformat` is a pure-Python library for the WK image container format.
It covers these parts of the format:

- reading and writing the chunked file layout;
- the 16-byte image header;
- the metadata a WK file can carry: EXIF, XMP, ICC colour profiles and custom
  key/value fields, with a binary serialisation for all of them together;
- HDR descriptors, PQ/HLG transfer functions and bit-depth helpers;
- tile grids, 8×8 coefficient scan orders and resync markers for
  progressive streams.

It uses only the standard library.

## Installation

```
pip install wkformat
```

To run the tests, install the `test` extra and run pytest:

```
pip install "wkformat[test]"
pytest
```

## File layout

A WK file opens with the 8-byte magic `WK3.0\x00\x00\x00`, which is available
as `wkformat.chunk.MAGIC`. A sequence of chunks follows, and each chunk has
four parts:

- a 4-byte tag. The tags are `IHDR`, `ICCP`, `EXIF`, `XMP\x00`, `THUM`,
  `ANIM`, `IDAT`, `IDLS`, `FRMD`, `CUST` and `IEND`.
- a little-endian 32-bit payload length;
- the payload;
- a little-endian CRC-32 computed over the tag followed by the payload.

`ChunkWriter.finish()` writes the closing `IEND` chunk.
`ChunkReader.read_all_chunks()` reads up to and including `IEND`.

## Writing and reading chunks

```python
import io

from wkformat.chunk import Chunk, ChunkReader, ChunkType, ChunkWriter
from wkformat.header import ColorType, WkHeader

header = WkHeader.lossless(32, 32, ColorType.RGB)

buffer = io.BytesIO()
writer = ChunkWriter(buffer)
writer.write_chunk(Chunk(ChunkType.IMAGE_HEADER, header.encode()))
writer.finish()

buffer.seek(0)
chunks = ChunkReader(buffer).read_all_chunks()
decoded = WkHeader.decode(chunks[0].data)
assert decoded.width == 32 and decoded.has_alpha is False
```

If you create a `Chunk` without a checksum, it computes one.
`Chunk.verify_crc()` checks a stored checksum against the contents.

## Errors

Errors are raised as exceptions from `wkformat.errors`. They all derive from
`WkError`. Each case raises a specific exception:

- A wrong magic number raises `InvalidFormatError`.
- An unknown chunk tag raises `InvalidChunkError`.
- A checksum that does not match raises `CrcMismatchError`. The exception
  carries `expected` and `actual`.
- A truncated stream raises `WkError`.
- A header shorter than 16 bytes, or one with an unknown colour type or
  compression mode, raises `InvalidFormatError`.
- A header field that does not fit its wire width raises `EncodingError`.
- Metadata that cannot be encoded or parsed raises `MetadataError`.

## Metadata

```python
from wkformat.exif import ExifBuilder
from wkformat.icc import IccProfile
from wkformat.metadata import WkMetadata
from wkformat.xmp import XmpBuilder

exif = ExifBuilder().make("Canon").model("EOS R5").iso(800).aperture(2.8).build()
xmp = XmpBuilder().title("Harbour").creator("Jane Doe").rating(4).build()

metadata = WkMetadata().with_exif(exif).with_xmp(xmp).with_icc(IccProfile.srgb())
metadata.custom.set("project", "demo")

restored = WkMetadata.decode(metadata.encode())
assert restored.exif.camera_make() == "Canon"
assert restored.exif.iso() == 800
assert restored.custom.get_string("project") == "demo"
```

The metadata classes behave as follows:

- `WkMetadata.with_exif`, `with_icc` and `with_xmp` return copies; they do
  not change the original object.
- XMP ratings are clamped to the range 0–5.
- `CustomMetadata` accepts these value types: strings, booleans, floats,
  64-bit integers, bytes, and lists of any of these.
- `CustomMetadata.create()` stamps the current time and the software name.
- `IccProfile` has these presets: `srgb`, `adobe_rgb`, `display_p3`,
  `prophoto_rgb` and `rec2020`. `from_raw` wraps an embedded profile.

## HDR and progressive helpers

`wkformat.hdr` provides:

- `pq_eotf`, `pq_oetf`, `hlg_eotf` and `hlg_oetf`;
- `convert_bit_depth`, `expand_to_16bit` (unpacks 8-, 10-, 12- and 16-bit
  samples) and `compress_to_8bit`;
- `HDRMetadata` with the presets `sdr`, `hdr10` and `hlg`.

`wkformat.progressive` provides:

- `TileGrid`, which splits an image into tiles in row-major order;
- `ScanOrder` and `ScanPass`, with `reorder_coefficients` and
  `merge_progressive_coefficients`, for 8×8 blocks;
- `insert_resync_marker` and `find_resync_marker`, which work with the
  marker `FF D0 00 00`.

## What this package does not do

The package does not compress or decompress pixel data. It does not convert
images to or from WK files. The payloads of `IDAT`, `IDLS` and `FRMD`
chunks pass through as opaque bytes. The package has no command-line tool
and no image viewer.