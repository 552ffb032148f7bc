#!/usr/bin/env python3

"""
In-place patch application

Header, version and expansion are handled before any record is read. Each
record is bounds checked against the (possibly grown) target before its
data is read and written. Records written before a corrupt record is found
are not rolled back, see `pokepatch.patch.apply_patch` for atomic staging.
"""

import io
from typing import BinaryIO, Callable

from pokepatch.config import DEFAULT_EXPANSION, ExpansionConfig
from pokepatch.codec import read_header, read_record_data, read_record_header
from pokepatch.errors import CorruptPatchError
from pokepatch.util.console import Console
from pokepatch.util.stream import stream_length

FILL_CHUNK = 1024 * 1024


def expand(target: BinaryIO, expansion: ExpansionConfig = DEFAULT_EXPANSION) -> int:
    """Grow the target to the expanded size, filling the new region"""
    length = stream_length(target)
    if length > expansion.expanded_size:
        raise CorruptPatchError(
            f"target is {length} bytes, larger than the expanded size {expansion.expanded_size}"
        )
    if length not in (expansion.base_size, expansion.expanded_size):
        Console.log_warning(f"Target is {length} bytes, expanded originals are {expansion.base_size} bytes")
    chunk = expansion.fill_byte * FILL_CHUNK
    target.seek(length)
    remaining = expansion.expanded_size - length
    while remaining > 0:
        size = min(remaining, FILL_CHUNK)
        target.write(chunk[:size])
        remaining -= size
    return expansion.expanded_size


def apply(
    target: BinaryIO,
    patch: BinaryIO,
    expansion: ExpansionConfig = DEFAULT_EXPANSION,
    progress_cb: Callable[[int], None] | None = None,
) -> int:
    """
    Apply a patch stream to a read/write target stream

    Returns the number of records written.
    """
    hdr = read_header(patch)
    if hdr.expanded:
        target_length = expand(target, expansion)
    else:
        target_length = stream_length(target)

    count = 0
    while (rec := read_record_header(patch)) is not None:
        if rec.offset >= target_length:
            raise CorruptPatchError(f"offset 0x{rec.offset:08x} outside target of {target_length} bytes")
        if rec.offset + rec.length > target_length:
            raise CorruptPatchError(
                f"{rec.length} bytes at 0x{rec.offset:08x} overrun target of {target_length} bytes"
            )
        data = read_record_data(patch, rec)
        target.seek(rec.offset)
        target.write(data)
        count += 1
        if progress_cb:
            progress_cb(patch.tell())

    target.flush()
    return count


def apply_bytes(
    bin_original: bytes,
    bin_patch: bytes,
    expansion: ExpansionConfig = DEFAULT_EXPANSION,
) -> bytes:
    """Apply an in-memory patch to an in-memory file, returning the patched file"""
    target = io.BytesIO(bin_original)
    apply(target, io.BytesIO(bin_patch), expansion)
    return target.getvalue()
