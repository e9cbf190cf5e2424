#!/usr/bin/env python3

"""Sequential stream helpers shared by the record codec and the merger"""

import io
from typing import BinaryIO, Protocol

from grfmerge.common import BLOCK_SIZE
from grfmerge.exceptions import FormatError


class Sink(Protocol):
    """Destination of transferred bytes"""

    def write(self, data: bytes, /) -> int: ...


class DiscardSink:
    """Sink that consumes and drops everything written to it"""

    def write(self, data: bytes, /) -> int:
        return len(data)


DISCARD = DiscardSink()


def read_exact(source: BinaryIO, length: int, action: str) -> bytes:
    """Read exactly `length` bytes, a short read is a format error"""
    data = source.read(length)
    if len(data) != length:
        raise FormatError(
            f"Error while {action}, wanted {length} bytes, got {len(data)} (offset {source.tell()})"
        )
    return data


def transfer(source: BinaryIO, sink: Sink, length: int, action: str) -> bytes:
    """Read `length` bytes from `source` and mirror them to `sink`"""
    data = read_exact(source, length, action)
    sink.write(data)
    return data


def copy_block(source: BinaryIO, sink: Sink, length: int) -> None:
    """Move `length` bytes between streams without holding them all in memory"""
    while length > 0:
        chunk = min(length, BLOCK_SIZE)
        transfer(source, sink, chunk, "copying block")
        length -= chunk


def stream_size(stream: BinaryIO) -> int:
    """Total size of a seekable stream, position is preserved"""
    pos = stream.tell()
    size = stream.seek(0, io.SEEK_END)
    stream.seek(pos)
    return size
