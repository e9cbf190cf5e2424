#!/usr/bin/env python3

"""GRD patch set layout"""

import ctypes
from collections.abc import Generator
from typing import BinaryIO

from grfmerge.common import GRD_MAGIC, GRD_MAX_VERSION, GRF_EXTENSION
from grfmerge.exceptions import FormatError
from grfmerge.stream import read_exact
from grfmerge.util.ctypes import read_struct


class PatchSetHeader(ctypes.LittleEndianStructure):
    """Header following the magic, the target name follows directly"""

    _fields_ = [
        ("version", ctypes.c_uint16),
        ("count", ctypes.c_uint16),
        ("name_len", ctypes.c_uint8),
    ]
    _pack_ = 1


class EntryHeader(ctypes.LittleEndianStructure):
    """Precedes every replacement record"""

    _fields_ = [
        ("index", ctypes.c_uint16),
    ]
    _pack_ = 1


def read_magic(patch: BinaryIO) -> bool:
    """Consume the magic at the current position, returning whether it is valid"""
    magic = patch.read(4)
    return len(magic) == 4 and int.from_bytes(magic, "little") == GRD_MAGIC


class PatchSet:
    """A single patch set, positioned at its first entry"""

    def __init__(self, version: int, count: int, name: str):
        self.version = version
        self.count = count
        self.name = name

    @property
    def default_target(self) -> str:
        """File name of the GRF the patch set was generated from"""
        return f"{self.name}{GRF_EXTENSION}"

    @classmethod
    def read_header(cls, patch: BinaryIO):
        """Parse the header of a patch set, the magic has already been consumed"""
        hdr = read_struct(patch, PatchSetHeader, "reading GRD header")
        if hdr.version > GRD_MAX_VERSION:
            raise FormatError(f"This is a GRD file version {hdr.version}, I don't know how to handle that")
        raw_name = read_exact(patch, hdr.name_len, "reading GRD header")
        try:
            name = raw_name.decode("ascii")
        except UnicodeDecodeError:
            raise FormatError(f"GRD target name {raw_name!r} is not ASCII") from None
        return cls(hdr.version, hdr.count, name)

    def indices(self, patch: BinaryIO) -> Generator[int, None, None]:
        """Yield each entry's record index

        The caller must consume the entry's record from `patch` before
        requesting the next index.
        """
        for _ in range(self.count):
            yield read_struct(patch, EntryHeader, "reading GRD entry").index
