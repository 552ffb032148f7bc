#!/usr/bin/env python3

"""
Change record extraction

Both files are compared over the length of the original. Any bytes of the
modified file past that length are compared against the expansion fill
value, since the applier pre-fills the grown target with it. Runs of
differing bytes are never coalesced across that boundary.
"""

import io
from typing import BinaryIO, Callable, List, Tuple

from pokepatch.config import DEFAULT_EXPANSION, ExpansionConfig
from pokepatch.errors import IdenticalInputsError, InvalidInputError
from pokepatch.format import MAX_TARGET_SIZE, ChangeRecord
from pokepatch.util.console import Console
from pokepatch.util.stream import read_exact, stream_length

BLOCK_SIZE = 64 * 1024


class _RunBuilder:
    """Accumulates differing bytes into ordered, non-touching change records"""

    def __init__(self):
        self.records: List[ChangeRecord] = []
        self._current: ChangeRecord | None = None

    def differ(self, offset: int, value: int):
        if self._current is None:
            self._current = ChangeRecord(offset, bytes([value]))
            self.records.append(self._current)
        else:
            self._current.append(value)

    def match(self):
        self._current = None

    def compare(self, offset: int, expected: bytes, actual: bytes):
        """Compare two equal length blocks starting at `offset`"""
        if expected == actual:
            self.match()
            return
        for idx, (e, a) in enumerate(zip(expected, actual)):
            if e != a:
                self.differ(offset + idx, a)
            else:
                self.match()


def diff(
    original: BinaryIO,
    modified: BinaryIO,
    expansion: ExpansionConfig = DEFAULT_EXPANSION,
    progress_cb: Callable[[int], None] | None = None,
) -> Tuple[bool, List[ChangeRecord]]:
    """
    Find all differences between two seekable binary streams

    Returns the expansion flag and the change records in increasing offset
    order. Raises `InvalidInputError` if the modified stream is shorter than
    the original and `IdenticalInputsError` if no records were found.
    """
    length_o = stream_length(original)
    length_m = stream_length(modified)
    if length_m < length_o:
        raise InvalidInputError(f"modified {length_m} bytes < original {length_o} bytes")
    if length_m > MAX_TARGET_SIZE:
        raise InvalidInputError(f"modified {length_m} bytes exceeds 32 bit offsets")

    expanded = length_m > length_o
    if expanded and length_o != expansion.base_size:
        Console.log_warning(
            f"Original file is {length_o} bytes, expanded originals are {expansion.base_size} bytes"
        )
    if expanded and length_m != expansion.expanded_size:
        Console.log_warning(
            f"Modified file is {length_m} bytes, expanded targets are {expansion.expanded_size} bytes"
        )

    runs = _RunBuilder()
    original.seek(0)
    modified.seek(0)

    # Overlapping region
    offset = 0
    while offset < length_o:
        size = min(BLOCK_SIZE, length_o - offset)
        block_o = read_exact(original, size)
        block_m = read_exact(modified, size)
        if len(block_o) != size or len(block_m) != size:
            raise InvalidInputError(f"short read at offset 0x{offset:08x}")
        runs.compare(offset, block_o, block_m)
        offset += size
        if progress_cb:
            progress_cb(offset)

    # Expanded region, compared against the fill value
    runs.match()
    fill = expansion.fill_byte * min(BLOCK_SIZE, length_m - length_o)
    while offset < length_m:
        size = min(BLOCK_SIZE, length_m - offset)
        block_m = read_exact(modified, size)
        if len(block_m) != size:
            raise InvalidInputError(f"short read at offset 0x{offset:08x}")
        runs.compare(offset, fill[:size], block_m)
        offset += size
        if progress_cb:
            progress_cb(offset)

    if len(runs.records) == 0:
        raise IdenticalInputsError()
    return expanded, runs.records


def diff_bytes(
    original: bytes,
    modified: bytes,
    expansion: ExpansionConfig = DEFAULT_EXPANSION,
) -> Tuple[bool, List[ChangeRecord]]:
    """Find all differences between two in-memory files"""
    return diff(io.BytesIO(original), io.BytesIO(modified), expansion)
