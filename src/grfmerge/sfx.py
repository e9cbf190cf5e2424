#!/usr/bin/env python3

"""Self-extracting GRD executables

A self-extracting GRD is a DOS/Windows executable with the patch stream
appended. The header word at 0x1C (unused by the loader) holds the marker
"JD", followed by a radix and exponent byte that give the offset of the
appended stream as `radix * 2**exponent`.
"""

import pathlib
import sys
from typing import NamedTuple

from grfmerge.common import (
    EXE_EXTENSION,
    EXE_SIGNATURE,
    GRD_MAGIC,
    SFX_MARKER,
    SFX_MARKER_OFFSET,
)
from grfmerge.stream import read_exact


class PayloadLocation(NamedTuple):
    is_wrapper: bool
    offset: int


NOT_WRAPPED = PayloadLocation(False, 0)


def resolve_image_path(path: str | pathlib.Path) -> pathlib.Path | None:
    """Find a readable image, retrying with the executable extension appended"""
    p = pathlib.Path(path)
    for candidate in (p, pathlib.Path(f"{path}{EXE_EXTENSION}")):
        if candidate.is_file():
            return candidate
    return None


def self_image_path() -> pathlib.Path | None:
    """Executable image of the running program, if it is a frozen binary"""
    if getattr(sys, "frozen", False):
        return pathlib.Path(sys.executable)
    return None


def locate_payload(path: str | pathlib.Path) -> PayloadLocation:
    """Determine whether `path` wraps a patch stream, and where it starts"""
    image = resolve_image_path(path)
    if image is None:
        return NOT_WRAPPED

    action = "reading exe"
    with open(image, "rb") as f:
        if f.read(2) != EXE_SIGNATURE:
            return NOT_WRAPPED

        f.seek(SFX_MARKER_OFFSET)
        if read_exact(f, 2, action) != SFX_MARKER:
            return NOT_WRAPPED

        radix, exponent = read_exact(f, 2, action)
        offset = radix * (1 << exponent)
        f.seek(offset)
        magic = int.from_bytes(read_exact(f, 4, action), "little")

    if magic != GRD_MAGIC:
        return NOT_WRAPPED
    return PayloadLocation(True, offset)
