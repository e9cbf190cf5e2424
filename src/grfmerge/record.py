#!/usr/bin/env python3

"""Length-framed sprite record codec

A record starts with a 16 bit length and an info byte. Depending on the info
byte the length is either the number of bytes that follow, or the size of the
sprite once decompressed. In the second case the compressed runs have to be
walked to find where the record ends, but none of the pixel data is decoded.
"""

import enum
from typing import BinaryIO

from grfmerge.common import RECORD_SUBHEADER_LEN, RecordInfo
from grfmerge.exceptions import CorruptionError, FormatError
from grfmerge.stream import DISCARD, Sink, copy_block, transfer


class RecordStatus(enum.Enum):
    """Outcome of transferring a single record"""

    PRESENT = 1
    # Zero length sentinel, mirrored to the sink
    END_MARKER = 2
    # Source exhausted on a record boundary, nothing written
    END_OF_FILE = 3

    def __bool__(self) -> bool:
        return self is RecordStatus.PRESENT


def run_length(code: int) -> int:
    """Number of decoded bytes produced by a compressed run code"""
    if code < 0:
        return -(code >> 3)
    return code if code else 128


def transfer_record(source: BinaryIO, sink: Sink) -> RecordStatus:
    """Move exactly one record from `source` to `sink`"""
    start = source.tell()
    size_bytes = source.read(2)
    if len(size_bytes) == 0:
        return RecordStatus.END_OF_FILE
    if len(size_bytes) != 2:
        raise FormatError(f"Truncated record length at offset {start}")
    sink.write(size_bytes)
    size = int.from_bytes(size_bytes, "little")
    if size == 0:
        return RecordStatus.END_MARKER

    info = transfer(source, sink, 1, "reading record info")[0]

    if info == RecordInfo.VERBATIM:
        copy_block(source, sink, size)
        return RecordStatus.PRESENT

    if info & RecordInfo.SIZE_IS_ENCODED:
        # Info byte is part of the encoded length
        copy_block(source, sink, size - 1)
        return RecordStatus.PRESENT

    if size < RECORD_SUBHEADER_LEN + 1:
        raise CorruptionError(f"Record at offset {start} has impossible decoded size {size}")

    copy_block(source, sink, RECORD_SUBHEADER_LEN)
    remaining = size - (RECORD_SUBHEADER_LEN + 1)
    while remaining > 0:
        code = int.from_bytes(transfer(source, sink, 1, "reading run code"), "little", signed=True)
        length = run_length(code)
        if code < 0:
            # Back reference offset, not interpreted
            transfer(source, sink, 1, "reading run offset")
        else:
            copy_block(source, sink, length)
        if length > remaining:
            raise CorruptionError(
                f"Run of {length} bytes overruns record at offset {start} "
                f"({remaining} bytes remaining, now at offset {source.tell()})"
            )
        remaining -= length
    return RecordStatus.PRESENT


def skip_record(source: BinaryIO) -> RecordStatus:
    """Advance `source` past one record"""
    return transfer_record(source, DISCARD)

