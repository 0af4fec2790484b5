"""Exception hierarchy for reading and writing WK images."""

from __future__ import annotations


class WkError(Exception):
    """Base class of every error raised by the package."""

    prefix = ""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = f"{self.prefix}: {detail}" if self.prefix else detail
        super().__init__(message)


class InvalidFormatError(WkError):
    """The data is not a well-formed WK stream."""

    prefix = "Invalid format"


class EncodingError(WkError):
    """An image could not be encoded."""

    prefix = "Encoding error"


class DecodingError(WkError):
    """An image could not be decoded."""

    prefix = "Decoding error"


class UnsupportedFeatureError(WkError):
    """The stream uses a feature that is not supported."""

    prefix = "Unsupported feature"


class CrcMismatchError(WkError):
    """A chunk's stored checksum does not match its contents."""

    prefix = "CRC mismatch"

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected:#010x}, got {actual:#010x}")


class InvalidChunkError(WkError):
    """A chunk has an unknown type or a broken layout."""

    prefix = "Invalid chunk"


class MissingChunkError(WkError):
    """A chunk required by the format is absent."""

    prefix = "Missing required chunk"


class CompressionError(WkError):
    """Compression or decompression of pixel data failed."""

    prefix = "Compression error"


class MetadataError(WkError):
    """Metadata could not be serialised or parsed."""

    prefix = "Metadata error"


class ImageProcessingError(WkError):
    """An image operation failed."""

    prefix = "Image processing error"