#!/usr/bin/env python3

"""
PPS patch file layout

All integers are little-endian.

    0x00  magic     13 bytes  "POKEPTCHRSYSM"
    0x0D  version   u8        PATCH_VERSION
    0x0E  expanded  u8        1 = grow target before replay
    0x0F  reserved  u8
    0x10  records   repeated until end of file
            u32 offset
            i32 length
            length bytes of data
"""

import ctypes

from typing_extensions import Self

from pokepatch.util.ctypes import bytes_to_uint8

# Legacy identifier, single byte code page. Compared as raw bytes.
PATCH_MAGIC = b"POKEPTCHRSYSM"
PATCH_VERSION = 1


class PatchHeader(ctypes.LittleEndianStructure):
    """Fixed patch file header"""

    _fields_ = [
        ("magic", ctypes.c_uint8 * len(PATCH_MAGIC)),
        ("version", ctypes.c_uint8),
        ("expanded", ctypes.c_uint8),
        ("reserved", ctypes.c_uint8),
    ]
    _pack_ = 1

    @classmethod
    def create(cls, expanded: bool) -> Self:
        return cls(bytes_to_uint8(PATCH_MAGIC), PATCH_VERSION, int(expanded), 0)

    @property
    def magic_bytes(self) -> bytes:
        return bytes(self.magic)


class RecordHeader(ctypes.LittleEndianStructure):
    """Header preceding the data of each change record"""

    _fields_ = [
        ("offset", ctypes.c_uint32),
        ("length", ctypes.c_int32),
    ]
    _pack_ = 1


HEADER_SIZE = ctypes.sizeof(PatchHeader)
RECORD_HEADER_SIZE = ctypes.sizeof(RecordHeader)
# Record offsets are u32
MAX_TARGET_SIZE = 2**32

assert HEADER_SIZE == 0x10
assert RECORD_HEADER_SIZE == 8


class ChangeRecord:
    """Contiguous run of bytes that differ from the original"""

    def __init__(self, offset: int, data: bytes | bytearray):
        assert len(data) > 0
        self.offset = offset
        self.data = bytearray(data)

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        """First offset after the record"""
        return self.offset + len(self.data)

    def append(self, value: int):
        """Extend the run by one byte"""
        self.data.append(value)

    def __bytes__(self) -> bytes:
        return bytes(RecordHeader(self.offset, len(self.data))) + bytes(self.data)

    def __len__(self):
        return RECORD_HEADER_SIZE + len(self.data)

    def __eq__(self, other):
        if not isinstance(other, ChangeRecord):
            return NotImplemented
        return self.offset == other.offset and self.data == other.data

    def __repr__(self):
        if len(self.data) <= 16:
            return f"ChangeRecord(offset=0x{self.offset:08x}, data={bytes(self.data).hex()})"
        return f"ChangeRecord(offset=0x{self.offset:08x}, length={len(self.data)})"

    def __str__(self):
        return f"WRITE: {len(self.data):6d} bytes @ 0x{self.offset:08x}"
