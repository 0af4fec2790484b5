"""Aggregate image metadata and its binary serialisation."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

from .custom import CustomMetadata, MetadataValue
from .errors import MetadataError
from .exif import ExifData, ExifTag, ExifValue, ExifValueKind
from .icc import ColorSpace, IccProfile, RenderingIntent
from .xmp import XmpData

_T = TypeVar("_T")
_E = TypeVar("_E", bound=Enum)


class _Writer:
    """Little-endian, length-prefixed encoder."""

    def __init__(self) -> None:
        self.buf = bytearray()

    def pack(self, fmt: str, value: Any) -> None:
        try:
            self.buf += struct.pack("<" + fmt, value)
        except (struct.error, TypeError) as exc:
            raise MetadataError(f"cannot encode {value!r}: {exc}") from None

    def u8(self, value: int) -> None:
        self.pack("B", value)

    def u32(self, value: int) -> None:
        self.pack("I", value)

    def i32(self, value: int) -> None:
        self.pack("i", value)

    def u64(self, value: int) -> None:
        self.pack("Q", value)

    def i64(self, value: int) -> None:
        self.pack("q", value)

    def f64(self, value: float) -> None:
        self.pack("d", value)

    def boolean(self, value: bool) -> None:
        self.u8(1 if value else 0)

    def blob(self, value: bytes) -> None:
        try:
            raw = bytes(value)
        except TypeError:
            raise MetadataError(f"cannot encode {value!r} as bytes") from None
        self.u64(len(raw))
        self.buf += raw

    def string(self, value: str) -> None:
        if not isinstance(value, str):
            raise MetadataError(f"expected a string, got {value!r}")
        self.blob(value.encode("utf-8"))

    def variant(self, member: Enum) -> None:
        self.u32(list(type(member)).index(member))

    def option(self, value: _T | None, write: Callable[[_T], None]) -> None:
        if value is None:
            self.u8(0)
        else:
            self.u8(1)
            write(value)

    def sequence(self, items: Iterable[_T], write: Callable[[_T], None]) -> None:
        items = list(items)
        self.u64(len(items))
        for item in items:
            write(item)

    def mapping(self, items: dict, write_key: Callable, write_value: Callable) -> None:
        self.u64(len(items))
        for key, value in items.items():
            write_key(key)
            write_value(value)


class _Reader:
    """Decoder matching _Writer."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0

    def take(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise MetadataError("unexpected end of metadata")
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def unpack(self, fmt: str) -> Any:
        layout = struct.Struct("<" + fmt)
        (value,) = layout.unpack(self.take(layout.size))
        return value

    def u8(self) -> int:
        return self.unpack("B")

    def u32(self) -> int:
        return self.unpack("I")

    def i32(self) -> int:
        return self.unpack("i")

    def u64(self) -> int:
        return self.unpack("Q")

    def i64(self) -> int:
        return self.unpack("q")

    def f64(self) -> float:
        return self.unpack("d")

    def boolean(self) -> bool:
        value = self.u8()
        if value > 1:
            raise MetadataError(f"invalid boolean byte: {value}")
        return bool(value)

    def blob(self) -> bytes:
        return self.take(self.u64())

    def string(self) -> str:
        try:
            return self.blob().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MetadataError(f"invalid UTF-8 in string: {exc}") from None

    def variant(self, enum_cls: type[_E]) -> _E:
        index = self.u32()
        members = list(enum_cls)
        if index >= len(members):
            raise MetadataError(f"invalid {enum_cls.__name__} variant index: {index}")
        return members[index]

    def option(self, read: Callable[[], _T]) -> _T | None:
        tag = self.u8()
        if tag == 0:
            return None
        if tag == 1:
            return read()
        raise MetadataError(f"invalid option tag: {tag}")

    def sequence(self, read: Callable[[], _T]) -> list[_T]:
        return [read() for _ in range(self.u64())]

    def mapping(self, read_key: Callable, read_value: Callable) -> dict:
        result = {}
        for _ in range(self.u64()):
            key = read_key()
            result[key] = read_value()
        return result


_STRING, _INT, _FLOAT, _BOOL, _BYTES, _ARRAY = range(6)


def _write_value(w: _Writer, value: MetadataValue) -> None:
    if isinstance(value, str):
        w.u32(_STRING)
        w.string(value)
    elif isinstance(value, bool):
        w.u32(_BOOL)
        w.boolean(value)
    elif isinstance(value, int):
        w.u32(_INT)
        w.i64(value)
    elif isinstance(value, float):
        w.u32(_FLOAT)
        w.f64(value)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        w.u32(_BYTES)
        w.blob(value)
    elif isinstance(value, (list, tuple)):
        w.u32(_ARRAY)
        w.sequence(value, lambda item: _write_value(w, item))
    else:
        raise MetadataError(f"unsupported metadata value: {value!r}")


def _read_value(r: _Reader) -> MetadataValue:
    tag = r.u32()
    if tag == _STRING:
        return r.string()
    if tag == _INT:
        return r.i64()
    if tag == _FLOAT:
        return r.f64()
    if tag == _BOOL:
        return r.boolean()
    if tag == _BYTES:
        return r.blob()
    if tag == _ARRAY:
        return r.sequence(lambda: _read_value(r))
    raise MetadataError(f"invalid metadata value variant index: {tag}")


def _write_exif_value(w: _Writer, value: ExifValue) -> None:
    kind = value.kind
    w.variant(kind)
    if kind is ExifValueKind.STRING:
        w.string(value.value)
    elif kind is ExifValueKind.INT:
        w.i64(value.value)
    elif kind is ExifValueKind.UINT:
        w.u64(value.value)
    elif kind is ExifValueKind.FLOAT:
        w.f64(value.value)
    elif kind is ExifValueKind.RATIONAL:
        numerator, denominator = value.value
        w.u32(numerator)
        w.u32(denominator)
    elif kind is ExifValueKind.SRATIONAL:
        numerator, denominator = value.value
        w.i32(numerator)
        w.i32(denominator)
    else:
        w.blob(value.value)


def _read_exif_value(r: _Reader) -> ExifValue:
    kind = r.variant(ExifValueKind)
    if kind is ExifValueKind.STRING:
        payload: Any = r.string()
    elif kind is ExifValueKind.INT:
        payload = r.i64()
    elif kind is ExifValueKind.UINT:
        payload = r.u64()
    elif kind is ExifValueKind.FLOAT:
        payload = r.f64()
    elif kind is ExifValueKind.RATIONAL:
        payload = (r.u32(), r.u32())
    elif kind is ExifValueKind.SRATIONAL:
        payload = (r.i32(), r.i32())
    else:
        payload = r.blob()
    return ExifValue(kind, payload)


def _write_exif(w: _Writer, exif: ExifData) -> None:
    w.mapping(exif.tags, w.variant, lambda value: _write_exif_value(w, value))


def _read_exif(r: _Reader) -> ExifData:
    return ExifData(r.mapping(lambda: r.variant(ExifTag), lambda: _read_exif_value(r)))


def _write_icc(w: _Writer, icc: IccProfile) -> None:
    w.variant(icc.color_space)
    w.variant(icc.rendering_intent)
    w.string(icc.profile_name)
    w.string(icc.description)
    w.option(icc.raw_data, w.blob)


def _read_icc(r: _Reader) -> IccProfile:
    return IccProfile(
        color_space=r.variant(ColorSpace),
        rendering_intent=r.variant(RenderingIntent),
        profile_name=r.string(),
        description=r.string(),
        raw_data=r.option(r.blob),
    )


def _write_xmp(w: _Writer, xmp: XmpData) -> None:
    w.option(xmp.title, w.string)
    w.option(xmp.description, w.string)
    w.sequence(xmp.creator, w.string)
    w.sequence(xmp.subject, w.string)
    w.option(xmp.rights, w.string)
    w.option(xmp.rating, w.u8)
    w.option(xmp.label, w.string)
    w.option(xmp.marked, w.boolean)
    w.option(xmp.create_date, w.string)
    w.option(xmp.modify_date, w.string)
    w.option(xmp.creator_tool, w.string)
    w.mapping(xmp.custom, w.string, w.string)


def _read_xmp(r: _Reader) -> XmpData:
    return XmpData(
        title=r.option(r.string),
        description=r.option(r.string),
        creator=r.sequence(r.string),
        subject=r.sequence(r.string),
        rights=r.option(r.string),
        rating=r.option(r.u8),
        label=r.option(r.string),
        marked=r.option(r.boolean),
        create_date=r.option(r.string),
        modify_date=r.option(r.string),
        creator_tool=r.option(r.string),
        custom=r.mapping(r.string, r.string),
    )


def _write_custom(w: _Writer, custom: CustomMetadata) -> None:
    w.option(custom.created_at, w.string)
    w.option(custom.software, w.string)
    w.option(custom.author, w.string)
    w.option(custom.description, w.string)
    w.mapping(custom.fields, w.string, lambda value: _write_value(w, value))


def _read_custom(r: _Reader) -> CustomMetadata:
    return CustomMetadata(
        created_at=r.option(r.string),
        software=r.option(r.string),
        author=r.option(r.string),
        description=r.option(r.string),
        fields=r.mapping(r.string, lambda: _read_value(r)),
    )


@dataclass
class WkMetadata:
    """All metadata carried by a WK image."""

    exif: ExifData | None = None
    icc_profile: IccProfile | None = None
    xmp: XmpData | None = None
    custom: CustomMetadata = field(default_factory=CustomMetadata)

    def with_exif(self, exif: ExifData) -> WkMetadata:
        """A copy carrying the given EXIF data."""
        return replace(self, exif=exif)

    def with_icc(self, icc: IccProfile) -> WkMetadata:
        """A copy carrying the given colour profile."""
        return replace(self, icc_profile=icc)

    def with_xmp(self, xmp: XmpData) -> WkMetadata:
        """A copy carrying the given XMP data."""
        return replace(self, xmp=xmp)

    def encode(self) -> bytes:
        """Serialise to the binary metadata form."""
        w = _Writer()
        w.option(self.exif, lambda exif: _write_exif(w, exif))
        w.option(self.icc_profile, lambda icc: _write_icc(w, icc))
        w.option(self.xmp, lambda xmp: _write_xmp(w, xmp))
        _write_custom(w, self.custom)
        return bytes(w.buf)

    @classmethod
    def decode(cls, data: bytes) -> WkMetadata:
        """Parse the binary metadata form; trailing bytes are ignored."""
        r = _Reader(data)
        return cls(
            exif=r.option(lambda: _read_exif(r)),
            icc_profile=r.option(lambda: _read_icc(r)),
            xmp=r.option(lambda: _read_xmp(r)),
            custom=_read_custom(r),
        )