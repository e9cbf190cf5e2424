#!/usr/bin/env python3

import enum

GRD_MAGIC = 0x67FB49AD
GRD_MAX_VERSION = 1

GRF_EXTENSION = ".grf"
BACKUP_EXTENSION = ".bak"
TEMP_FILENAME = "grfmerge.tmp"

# Windows may omit the extension from argv[0]
EXE_EXTENSION = ".exe"
EXE_SIGNATURE = b"MZ"
SFX_MARKER = b"JD"
SFX_MARKER_OFFSET = 0x1C

BLOCK_SIZE = 8192

# Stream end sentinel and the checksum placeholder that follows it
END_MARKER = b"\x00\x00"
CHECKSUM_PLACEHOLDER = b"\x00\x00\x00\x00"


class RecordInfo(enum.IntEnum):
    """Record info byte flags"""

    SIZE_IS_ENCODED = 0x02
    VERBATIM = 0xFF


# Bytes between the info byte and the first run code of a compressed record
RECORD_SUBHEADER_LEN = 7
