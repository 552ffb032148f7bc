#!/usr/bin/env python3

"""Patch serialisation and stream decoding"""

import ctypes
import io
from typing import BinaryIO, Iterable, List, Tuple

from pokepatch.errors import BadHeaderError, CorruptPatchError, UnsupportedVersionError
from pokepatch.format import (
    HEADER_SIZE,
    PATCH_MAGIC,
    PATCH_VERSION,
    RECORD_HEADER_SIZE,
    ChangeRecord,
    PatchHeader,
    RecordHeader,
)
from pokepatch.util.stream import read_exact


def encode(expanded: bool, records: Iterable[ChangeRecord]) -> bytes:
    """Serialise the expansion flag and change records into a patch file"""
    output = bytearray(PatchHeader.create(expanded))
    for record in records:
        output += bytes(record)
    return bytes(output)


def read_header(patch: BinaryIO) -> PatchHeader:
    """Read and validate the patch file header"""
    raw = read_exact(patch, HEADER_SIZE)
    if raw[: len(PATCH_MAGIC)] != PATCH_MAGIC:
        raise BadHeaderError()
    if len(raw) < HEADER_SIZE:
        raise CorruptPatchError(f"header truncated to {len(raw)} bytes")
    hdr = PatchHeader.from_buffer_copy(raw)
    if hdr.version != PATCH_VERSION:
        raise UnsupportedVersionError(f"version {hdr.version}, supported {PATCH_VERSION}")
    if hdr.expanded not in (0, 1):
        raise CorruptPatchError(f"invalid expansion flag {hdr.expanded}")
    return hdr


def read_record_header(patch: BinaryIO) -> RecordHeader | None:
    """Read the next record header, `None` at the end of the patch"""
    raw = read_exact(patch, RECORD_HEADER_SIZE)
    if len(raw) == 0:
        return None
    if len(raw) < RECORD_HEADER_SIZE:
        raise CorruptPatchError(f"record header truncated to {len(raw)} bytes")
    hdr = RecordHeader.from_buffer_copy(raw)
    if hdr.length <= 0:
        raise CorruptPatchError(f"record length {hdr.length} at offset 0x{hdr.offset:08x}")
    return hdr


def read_record_data(patch: BinaryIO, hdr: RecordHeader) -> bytes:
    """Read the data that follows a record header"""
    data = read_exact(patch, hdr.length)
    if len(data) != hdr.length:
        raise CorruptPatchError(f"record data truncated ({len(data)} != {hdr.length})")
    return data


def read_patch(patch: BinaryIO) -> Tuple[PatchHeader, List[ChangeRecord]]:
    """
    Decode a complete patch file without a target

    Checks performed against the target length are left to the applier.
    """
    hdr = read_header(patch)
    records = []
    while (rec_hdr := read_record_header(patch)) is not None:
        records.append(ChangeRecord(rec_hdr.offset, read_record_data(patch, rec_hdr)))
    return hdr, records


def decode(bin_patch: bytes) -> Tuple[PatchHeader, List[ChangeRecord]]:
    """Decode an in-memory patch file"""
    return read_patch(io.BytesIO(bin_patch))


def encoded_length(records: Iterable[ChangeRecord]) -> int:
    """Size of the patch file that `encode` would produce"""
    return ctypes.sizeof(PatchHeader) + sum(len(r) for r in records)
