#!/usr/bin/env python3

import ctypes
from typing import BinaryIO, TypeVar

from grfmerge.stream import read_exact

T = TypeVar("T", bound=ctypes.LittleEndianStructure)


def read_struct(source: BinaryIO, struct_cls: type[T], action: str) -> T:
    """Read a packed structure from the current position of `source`"""
    return struct_cls.from_buffer_copy(read_exact(source, ctypes.sizeof(struct_cls), action))
