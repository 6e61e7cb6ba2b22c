"""Universally unique identifiers: the value type, text and binary codecs,
and helpers for storing identifiers in SQL columns."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum

SIZE = 16

V1 = 1
V2 = 2
V3 = 3
V4 = 4
V5 = 5


class Variant(IntEnum):
    """UUID layout variants."""

    NCS = 0
    RFC4122 = 1
    MICROSOFT = 2
    FUTURE = 3


class Domain(IntEnum):
    """DCE security domains."""

    PERSON = 0
    GROUP = 1
    ORG = 2


class UUIDError(ValueError):
    """Raised when input cannot be decoded into a UUID."""


_URN_PREFIX = b"urn:uuid:"
_HEX_RE = re.compile(rb"(?:[0-9a-fA-F]{2})*")
_CANONICAL_SPANS = ((0, 8), (9, 13), (14, 18), (19, 23), (24, 36))


class UUID:
    """An immutable 16-byte identifier."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview = bytes(SIZE)) -> None:
        raw = bytes(data)
        if len(raw) != SIZE:
            raise UUIDError(
                f"uuid: UUID must be exactly {SIZE} bytes long, got {len(raw)} bytes"
            )
        self._data = raw

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UUID):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __str__(self) -> str:
        h = self._data.hex()
        return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"

    def __repr__(self) -> str:
        return f"UUID('{self}')"

    def version(self) -> int:
        """Return the algorithm version stored in the identifier."""
        return self._data[6] >> 4

    def variant(self) -> Variant:
        """Return the layout variant stored in the identifier."""
        octet = self._data[8]
        if octet >> 7 == 0x00:
            return Variant.NCS
        if octet >> 6 == 0x02:
            return Variant.RFC4122
        if octet >> 5 == 0x06:
            return Variant.MICROSOFT
        return Variant.FUTURE

    def with_version(self, version: int) -> UUID:
        """Return a copy with the version bits replaced."""
        data = bytearray(self._data)
        data[6] = (data[6] & 0x0F) | ((version << 4) & 0xFF)
        return UUID(data)

    def with_variant(self, variant: int) -> UUID:
        """Return a copy with the variant bits replaced."""
        data = bytearray(self._data)
        if variant == Variant.NCS:
            data[8] = data[8] & (0xFF >> 1)
        elif variant == Variant.RFC4122:
            data[8] = (data[8] & (0xFF >> 2)) | (0x02 << 6)
        elif variant == Variant.MICROSOFT:
            data[8] = (data[8] & (0xFF >> 3)) | (0x06 << 5)
        else:
            data[8] = (data[8] & (0xFF >> 3)) | (0x07 << 5)
        return UUID(data)

    def marshal_text(self) -> bytes:
        """Return the canonical text form as bytes."""
        return str(self).encode("ascii")

    def marshal_binary(self) -> bytes:
        """Return the raw 16 bytes."""
        return self._data

    def value(self) -> str:
        """Return the value to store in a database column."""
        return str(self)


NIL = UUID()

NAMESPACE_DNS = UUID(bytes.fromhex("6ba7b8109dad11d180b400c04fd430c8"))
NAMESPACE_URL = UUID(bytes.fromhex("6ba7b8119dad11d180b400c04fd430c8"))
NAMESPACE_OID = UUID(bytes.fromhex("6ba7b8129dad11d180b400c04fd430c8"))
NAMESPACE_X500 = UUID(bytes.fromhex("6ba7b8149dad11d180b400c04fd430c8"))


def _show(text: bytes) -> str:
    return text.decode("utf-8", errors="replace")


def _decode_hex(chunk: bytes) -> bytes:
    if not _HEX_RE.fullmatch(chunk):
        raise UUIDError(f"uuid: invalid hex in UUID: {_show(chunk)}")
    return bytes.fromhex(chunk.decode("ascii"))


def _decode_hash_like(text: bytes) -> UUID:
    return UUID(_decode_hex(text))


def _decode_canonical(text: bytes) -> UUID:
    if any(text[pos] != ord("-") for pos in (8, 13, 18, 23)):
        raise UUIDError(f"uuid: incorrect UUID format {_show(text)}")
    return UUID(b"".join(_decode_hex(text[start:end]) for start, end in _CANONICAL_SPANS))


def _decode_plain(text: bytes) -> UUID:
    if len(text) == 32:
        return _decode_hash_like(text)
    if len(text) == 36:
        return _decode_canonical(text)
    raise UUIDError(f"uuid: incorrect UUID length: {_show(text)}")


def _decode_braced(text: bytes) -> UUID:
    if text[:1] != b"{" or text[-1:] != b"}":
        raise UUIDError(f"uuid: incorrect UUID format {_show(text)}")
    return _decode_plain(text[1:-1])


def _decode_urn(text: bytes) -> UUID:
    if text[:9] != _URN_PREFIX:
        raise UUIDError(f"uuid: incorrect UUID format: {_show(text)}")
    return _decode_plain(text[9:])


def _unmarshal_text(text: bytes) -> UUID:
    length = len(text)
    if length == 32:
        return _decode_hash_like(text)
    if length == 36:
        return _decode_canonical(text)
    if length == 38:
        return _decode_braced(text)
    if length in (41, 45):
        return _decode_urn(text)
    raise UUIDError(f"uuid: incorrect UUID length: {_show(text)}")


def from_bytes(data: bytes | bytearray | memoryview) -> UUID:
    """Build a UUID from exactly 16 raw bytes."""
    return UUID(data)


def from_bytes_or_nil(data: bytes | bytearray | memoryview) -> UUID:
    """Like from_bytes, but return NIL instead of raising."""
    try:
        return from_bytes(data)
    except UUIDError:
        return NIL


def from_string(text: str | bytes) -> UUID:
    """Parse canonical, hash-like, braced or URN text forms."""
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    return _unmarshal_text(raw)


def from_string_or_nil(text: str | bytes) -> UUID:
    """Like from_string, but return NIL instead of raising."""
    try:
        return from_string(text)
    except UUIDError:
        return NIL


def scan(src: object) -> UUID:
    """Decode a database value: 16 raw bytes, or text as bytes or str."""
    if isinstance(src, (bytes, bytearray, memoryview)):
        raw = bytes(src)
        if len(raw) == SIZE:
            return UUID(raw)
        return _unmarshal_text(raw)
    if isinstance(src, str):
        return from_string(src)
    raise TypeError(f"uuid: cannot convert {type(src).__name__} to UUID")


def equal(u1: UUID, u2: UUID) -> bool:
    """Return True when both identifiers hold the same bytes."""
    return bytes(u1) == bytes(u2)


@dataclass
class NullUUID:
    """A UUID that may be NULL in a database column."""

    uuid: UUID = field(default=NIL)
    valid: bool = False

    def value(self) -> str | None:
        """Return the stored text, or None when NULL."""
        if not self.valid:
            return None
        return self.uuid.value()

    def scan(self, src: object) -> None:
        """Load a database value; None marks the column as NULL."""
        if src is None:
            self.uuid, self.valid = NIL, False
            return
        self.uuid = scan(src)
        self.valid = True