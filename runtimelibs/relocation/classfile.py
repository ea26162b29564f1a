"""Minimal JVM class file reader/writer for constant-pool rewriting.

Only the constant pool is decoded. Every structure that follows it (fields,
methods, attributes, bytecode) refers to constants by index, so rewriting
``CONSTANT_Utf8`` values in place leaves the rest of the file valid and it
is copied through untouched.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, List, Tuple

from runtimelibs.domain import RelocationError

MAGIC = 0xCAFEBABE

CONSTANT_UTF8 = 1
CONSTANT_LONG = 5
CONSTANT_DOUBLE = 6

# Payload size in bytes after the tag, for every fixed-size constant kind.
_FIXED_SIZES = {
    3: 4,   # Integer
    4: 4,   # Float
    5: 8,   # Long
    6: 8,   # Double
    7: 2,   # Class
    8: 2,   # String
    9: 4,   # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}


@dataclass
class Constant:
    index: int
    tag: int
    raw: bytes

    @property
    def is_utf8(self) -> bool:
        return self.tag == CONSTANT_UTF8

    @property
    def value(self) -> bytes:
        """Modified UTF-8 payload of a ``CONSTANT_Utf8`` entry."""
        return self.raw[3:]


def parse_constant_pool(data: bytes) -> Tuple[List[Constant], int]:
    """Return the constant pool entries and the offset just past the pool."""
    if len(data) < 10:
        raise RelocationError("class file is truncated")
    magic, _minor, _major, count = struct.unpack_from(">IHHH", data, 0)
    if magic != MAGIC:
        raise RelocationError(f"bad class file magic 0x{magic:08X}")

    constants: List[Constant] = []
    offset = 10
    index = 1
    try:
        while index < count:
            tag = data[offset]
            if tag == CONSTANT_UTF8:
                (length,) = struct.unpack_from(">H", data, offset + 1)
                size = 3 + length
            elif tag in _FIXED_SIZES:
                size = 1 + _FIXED_SIZES[tag]
            else:
                raise RelocationError(f"unknown constant pool tag {tag} at index {index}")
            if offset + size > len(data):
                raise RelocationError("class file is truncated")
            constants.append(Constant(index, tag, data[offset:offset + size]))
            offset += size
            # 8-byte constants occupy two pool slots.
            index += 2 if tag in (CONSTANT_LONG, CONSTANT_DOUBLE) else 1
    except (IndexError, struct.error) as exc:
        raise RelocationError("class file is truncated") from exc
    return constants, offset


def rewrite_utf8_constants(data: bytes, remap: Callable[[bytes], bytes]) -> bytes:
    """Apply ``remap`` to every ``CONSTANT_Utf8`` value and return the new class file."""
    constants, end = parse_constant_pool(data)
    out = bytearray(data[:10])
    for constant in constants:
        if not constant.is_utf8:
            out += constant.raw
            continue
        value = remap(constant.value)
        if len(value) > 0xFFFF:
            raise RelocationError(f"relocated constant #{constant.index} exceeds 65535 bytes")
        out += struct.pack(">BH", CONSTANT_UTF8, len(value))
        out += value
    out += data[end:]
    return bytes(out)
