import pytest

from nacoskit.uuids import (
    NAMESPACE_DNS,
    NAMESPACE_URL,
    NIL,
    UUID,
    V1,
    V4,
    NullUUID,
    UUIDError,
    Variant,
    equal,
    from_bytes,
    from_bytes_or_nil,
    from_string,
    from_string_or_nil,
    scan,
)

RAW = bytes(
    [0x6B, 0xA7, 0xB8, 0x10, 0x9D, 0xAD, 0x11, 0xD1,
     0x80, 0xB4, 0x00, 0xC0, 0x4F, 0xD4, 0x30, 0xC8]
)
TEXT = "6ba7b810-9dad-11d1-80b4-00c04fd430c8"


@pytest.fixture
def sample():
    return UUID(RAW)


# --- uuid ---------------------------------------------------------------

def test_bytes(sample):
    assert bytes(sample) == RAW
    assert sample.marshal_binary() == RAW


def test_string():
    assert NAMESPACE_DNS.value() == TEXT
    assert str(from_string(TEXT)) == TEXT


def test_equal():
    assert equal(NAMESPACE_DNS, NAMESPACE_DNS) is True
    assert equal(NAMESPACE_DNS, NAMESPACE_URL) is False


def test_version():
    u = UUID(bytes([0, 0, 0, 0, 0, 0, 0x10] + [0] * 9))
    assert u.version() == V1


def test_with_version():
    u = UUID().with_version(4)
    assert u.version() == V4
    assert NIL.version() == 0


@pytest.mark.parametrize(
    "octet, expected",
    [
        (0x00, Variant.NCS),
        (0x80, Variant.RFC4122),
        (0xC0, Variant.MICROSOFT),
        (0xE0, Variant.FUTURE),
    ],
)
def test_variant(octet, expected):
    u = UUID(bytes([0] * 8 + [octet] + [0] * 7))
    assert u.variant() == expected


def test_with_variant():
    u = UUID()
    for variant in (Variant.NCS, Variant.RFC4122, Variant.MICROSOFT, Variant.FUTURE):
        u = u.with_variant(variant)
        assert u.variant() == variant


def test_wrong_size_constructor():
    with pytest.raises(UUIDError):
        UUID(b"\x00" * 15)


# --- codec --------------------------------------------------------------

def test_from_bytes(sample):
    assert from_bytes(RAW) == sample
    with pytest.raises(UUIDError):
        from_bytes(b"")


def test_unmarshal_binary_rejects_empty():
    with pytest.raises(UUIDError):
        from_bytes(bytes())


@pytest.mark.parametrize(
    "text",
    [
        TEXT,
        "{6ba7b810-9dad-11d1-80b4-00c04fd430c8}",
        "urn:uuid:6ba7b810-9dad-11d1-80b4-00c04fd430c8",
        "6ba7b8109dad11d180b400c04fd430c8",
        "urn:uuid:6ba7b8109dad11d180b400c04fd430c8",
        "6BA7B810-9DAD-11D1-80B4-00C04FD430C8",
    ],
)
def test_from_string(sample, text):
    assert from_string(text) == sample


def test_from_string_empty():
    with pytest.raises(UUIDError):
        from_string("")


def test_from_string_short():
    s1 = "6ba7b810-9dad-11d1-80b4-00c04fd430c"
    for end in range(len(s1), -1, -1):
        with pytest.raises(UUIDError):
            from_string(s1[:end])


@pytest.mark.parametrize(
    "text",
    [
        "6ba7b810-9dad-11d1-80b4-00c04fd430c8=",
        "6ba7b810-9dad-11d1-80b4-00c04fd430c8}",
        "{6ba7b810-9dad-11d1-80b4-00c04fd430c8}f",
        "6ba7b810-9dad-11d1-80b4-00c04fd430c800c04fd430c8",
    ],
)
def test_from_string_long(text):
    with pytest.raises(UUIDError):
        from_string(text)


@pytest.mark.parametrize(
    "text",
    [
        "6ba7b8109dad11d180b400c04fd430c86ba7b8109dad11d180b400c04fd430c8",
        "urn:uuid:{6ba7b810-9dad-11d1-80b4-00c04fd430c8}",
        "uuid:urn:6ba7b810-9dad-11d1-80b4-00c04fd430c8",
        "uuid:urn:6ba7b8109dad11d180b400c04fd430c8",
        "6ba7b8109-dad-11d1-80b4-00c04fd430c8",
        "6ba7b810-9dad1-1d1-80b4-00c04fd430c8",
        "6ba7b810-9dad-11d18-0b4-00c04fd430c8",
        "6ba7b810-9dad-11d1-80b40-0c04fd430c8",
        "6ba7b810+9dad+11d1+80b4+00c04fd430c8",
        "(6ba7b810-9dad-11d1-80b4-00c04fd430c8}",
        "{6ba7b810-9dad-11d1-80b4-00c04fd430c8>",
        "zba7b810-9dad-11d1-80b4-00c04fd430c8",
        "6ba7b810-9dad11d180b400c04fd430c8",
        "6ba7b8109dad-11d180b400c04fd430c8",
        "6ba7b8109dad11d1-80b400c04fd430c8",
        "6ba7b8109dad11d180b4-00c04fd430c8",
        "6ba7b810 9dad 11d1 80b4 00c04fd430c8",
    ],
)
def test_from_string_invalid(text):
    with pytest.raises(UUIDError):
        from_string(text)


def test_from_string_or_nil():
    assert from_string_or_nil("") == NIL
    assert from_string_or_nil(TEXT) == NAMESPACE_DNS


def test_from_bytes_or_nil(sample):
    assert from_bytes_or_nil(b"") == NIL
    assert from_bytes_or_nil(RAW) == sample


def test_marshal_text(sample):
    assert sample.marshal_text() == TEXT.encode("ascii")


def test_unmarshal_text_bytes(sample):
    assert from_string(TEXT.encode("ascii")) == sample
    with pytest.raises(UUIDError):
        from_string(b"")


def test_text_round_trip(sample):
    assert from_string(sample.marshal_text()) == sample
    assert from_bytes(sample.marshal_binary()) == sample


# --- sql ----------------------------------------------------------------

def test_value():
    u = from_string(TEXT)
    assert u.value() == str(u)


def test_value_nil():
    assert UUID().value() == NIL.value()
    assert NIL.value() == "00000000-0000-0000-0000-000000000000"


def test_null_uuid_value_nil():
    assert NullUUID().value() is None


def test_null_uuid_value_valid(sample):
    assert NullUUID(sample, True).value() == TEXT


def test_scan_binary(sample):
    assert scan(RAW) == sample
    with pytest.raises(UUIDError):
        scan(b"")


def test_scan_string(sample):
    assert scan(TEXT) == sample
    with pytest.raises(UUIDError):
        scan("")


def test_scan_text(sample):
    assert scan(TEXT.encode("ascii")) == sample
    with pytest.raises(UUIDError):
        scan(b"")


def test_scan_unsupported():
    with pytest.raises(TypeError):
        scan(True)


def test_scan_nil():
    with pytest.raises(TypeError):
        scan(None)


def test_null_uuid_scan_valid(sample):
    u = NullUUID()
    u.scan(TEXT)
    assert u.valid is True
    assert u.uuid == sample


def test_null_uuid_scan_nil(sample):
    u = NullUUID(sample, True)
    u.scan(None)
    assert u.valid is False
    assert u.uuid == NIL


def test_hash_consistent_with_equality(sample):
    assert {sample, from_string(TEXT)} == {sample}