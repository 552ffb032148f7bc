import io
import random

import pytest

from pokepatch.applier import apply, apply_bytes
from pokepatch.codec import encode
from pokepatch.config import MIB, ExpansionConfig
from pokepatch.differ import diff_bytes
from pokepatch.errors import (
    BadHeaderError,
    CorruptPatchError,
    UnsupportedVersionError,
)
from pokepatch.format import HEADER_SIZE, ChangeRecord, PatchHeader, RecordHeader

SMALL = ExpansionConfig(base_size=16, expanded_size=32)


def _patch(expanded: bool, *records: bytes) -> bytes:
    return bytes(PatchHeader.create(expanded)) + b"".join(records)


def _record(offset: int, length: int, data: bytes) -> bytes:
    return bytes(RecordHeader(offset, length)) + data


def test_round_trip():
    rng = random.Random(0x5EED)
    for _ in range(20):
        original = rng.randbytes(256)
        modified = bytearray(original)
        for _ in range(rng.randint(1, 10)):
            start = rng.randrange(256)
            end = min(256, start + rng.randint(1, 8))
            modified[start:end] = rng.randbytes(end - start)
        modified = bytes(modified)
        if modified == original:
            continue

        expanded, records = diff_bytes(original, modified)
        patch = encode(expanded, records)
        assert apply_bytes(original, patch) == modified


def test_round_trip_expanded():
    original = bytes(range(16))
    modified = bytearray(original + b"\xff" * 16)
    modified[0] = 0x80
    modified[20:23] = b"\x01\x02\x03"
    modified[31] = 0x00
    modified = bytes(modified)

    expanded, records = diff_bytes(original, modified, SMALL)
    assert expanded
    patch = encode(expanded, records)
    assert apply_bytes(original, patch, SMALL) == modified


def test_idempotent():
    original = bytes(64)
    modified = b"\x00" * 10 + b"\x55" * 4 + b"\x00" * 50
    patch = encode(*diff_bytes(original, modified))
    once = apply_bytes(original, patch)
    twice = apply_bytes(once, patch)
    assert once == twice == modified


def test_record_count():
    patch = _patch(False, _record(0, 1, b"\x01"), _record(4, 2, b"\x02\x03"))
    target = io.BytesIO(bytes(8))
    assert apply(target, io.BytesIO(patch)) == 2
    assert target.getvalue() == b"\x01\x00\x00\x00\x02\x03\x00\x00"


def test_bad_magic():
    patch = bytearray(_patch(False, _record(0, 1, b"\x01")))
    patch[0] = ord("X")
    target = io.BytesIO(bytes(8))
    with pytest.raises(BadHeaderError):
        apply(target, io.BytesIO(bytes(patch)))
    assert target.getvalue() == bytes(8)


def test_bad_magic_expanded_untouched():
    patch = bytearray(_patch(True, _record(20, 1, b"\x01")))
    patch[12] = 0
    target = io.BytesIO(bytes(16))
    with pytest.raises(BadHeaderError):
        apply(target, io.BytesIO(bytes(patch)), SMALL)
    assert target.getvalue() == bytes(16)


def test_short_header():
    with pytest.raises(BadHeaderError):
        apply(io.BytesIO(bytes(8)), io.BytesIO(b"POKE"))
    with pytest.raises(BadHeaderError):
        apply(io.BytesIO(bytes(8)), io.BytesIO(b""))
    with pytest.raises(CorruptPatchError):
        apply(io.BytesIO(bytes(8)), io.BytesIO(b"POKEPTCHRSYSM\x01"))


def test_unsupported_version():
    patch = bytearray(_patch(False, _record(0, 1, b"\x01")))
    patch[0x0D] = 2
    target = io.BytesIO(bytes(8))
    with pytest.raises(UnsupportedVersionError):
        apply(target, io.BytesIO(bytes(patch)))
    assert target.getvalue() == bytes(8)


def test_invalid_expansion_flag():
    patch = bytearray(_patch(False))
    patch[0x0E] = 2
    with pytest.raises(CorruptPatchError):
        apply(io.BytesIO(bytes(8)), io.BytesIO(bytes(patch)))


def test_offset_out_of_bounds():
    patch = _patch(False, _record(8, 1, b"\x01"))
    target = io.BytesIO(bytes(8))
    with pytest.raises(CorruptPatchError):
        apply(target, io.BytesIO(patch))
    assert target.getvalue() == bytes(8)


def test_length_out_of_bounds():
    patch = _patch(False, _record(6, 3, b"\x01\x02\x03"))
    target = io.BytesIO(bytes(8))
    with pytest.raises(CorruptPatchError):
        apply(target, io.BytesIO(patch))
    assert target.getvalue() == bytes(8)


def test_write_to_last_byte():
    patch = _patch(False, _record(6, 2, b"\x01\x02"))
    assert apply_bytes(bytes(8), patch) == b"\x00" * 6 + b"\x01\x02"


def test_zero_and_negative_length():
    for length in (0, -1):
        patch = _patch(False, _record(0, length, b""))
        with pytest.raises(CorruptPatchError):
            apply(io.BytesIO(bytes(8)), io.BytesIO(patch))


def test_truncated_record_header():
    patch = _patch(False, _record(0, 1, b"\x01")) + b"\x00\x00\x00"
    with pytest.raises(CorruptPatchError):
        apply(io.BytesIO(bytes(8)), io.BytesIO(patch))


def test_truncated_record_data():
    patch = _patch(False, _record(0, 4, b"\x01\x02"))
    target = io.BytesIO(bytes(8))
    with pytest.raises(CorruptPatchError):
        apply(target, io.BytesIO(patch))
    assert target.getvalue() == bytes(8)


def test_partial_write_not_rolled_back():
    patch = _patch(False, _record(0, 1, b"\x01"), _record(100, 1, b"\x02"))
    target = io.BytesIO(bytes(8))
    with pytest.raises(CorruptPatchError):
        apply(target, io.BytesIO(patch))
    assert target.getvalue() == b"\x01" + bytes(7)


def test_expansion_fill():
    patch = _patch(True, _record(17, 1, b"\xab"))
    patched = apply_bytes(bytes(16), patch, SMALL)
    assert patched == bytes(16) + b"\xff\xab" + b"\xff" * 14


def test_expansion_record_bounds():
    patch = _patch(True, _record(31, 2, b"\x01\x02"))
    with pytest.raises(CorruptPatchError):
        apply_bytes(bytes(16), patch, SMALL)


def test_expansion_target_too_large():
    patch = _patch(True, _record(0, 1, b"\x01"))
    with pytest.raises(CorruptPatchError):
        apply_bytes(bytes(33), patch, SMALL)


def test_full_size_expansion():
    base = 16 * MIB
    original = bytes(base)
    modified = bytearray(original + b"\xff" * base)
    modified[base + 5] = 0xAB
    modified = bytes(modified)

    expanded, records = diff_bytes(original, modified)
    assert expanded
    assert records == [ChangeRecord(16777221, b"\xab")]

    patch = encode(expanded, records)
    assert len(patch) == HEADER_SIZE + 8 + 1
    assert apply_bytes(original, patch) == modified


def test_idempotent_expanded():
    original = bytes(16)
    modified = bytearray(original + b"\xff" * 16)
    modified[2] = 0x33
    modified[24] = 0x44
    modified = bytes(modified)
    patch = encode(*diff_bytes(original, modified, SMALL))

    once = apply_bytes(original, patch, SMALL)
    assert len(once) == SMALL.expanded_size
    # Already at the expanded size, growth is a no-op
    twice = apply_bytes(once, patch, SMALL)
    assert once == twice == modified


def test_expansion_target_size_warning(capsys):
    patch = _patch(True, _record(17, 1, b"\xab"))

    apply_bytes(bytes(16), patch, SMALL)
    apply_bytes(bytes(32), patch, SMALL)
    assert capsys.readouterr().out == ""

    patched = apply_bytes(bytes(10), patch, SMALL)
    assert patched == bytes(10) + b"\xff" * 7 + b"\xab" + b"\xff" * 14
    assert "Target is 10 bytes" in capsys.readouterr().out
