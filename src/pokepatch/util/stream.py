#!/usr/bin/env python3

import os
from typing import BinaryIO


def stream_length(stream: BinaryIO) -> int:
    """Total length of a seekable stream, leaves the position unchanged"""
    position = stream.tell()
    length = stream.seek(0, os.SEEK_END)
    stream.seek(position)
    return length


def read_exact(stream: BinaryIO, length: int) -> bytes:
    """Read up to `length` bytes, retrying on short reads until EOF"""
    chunks = []
    remaining = length
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
