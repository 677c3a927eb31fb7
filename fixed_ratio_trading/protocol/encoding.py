"""
Fixed-width little-endian field packing

Shared by instruction data and PDA seeds, both of which carry u64 ratios
and amounts in the program's wire layout.
"""

import struct

from .constants import MAX_U64, MAX_U32
from ..errors import ParameterError


def pack_u64(value: int, name: str = "value") -> bytes:
    """Pack an unsigned 64-bit integer (little-endian), rejecting out-of-range values"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParameterError.invalid(name, f"expected int, got {type(value).__name__}")
    if value < 0 or value > MAX_U64:
        raise ParameterError.out_of_range(name, value, 0, MAX_U64)
    return struct.pack("<Q", value)


def pack_u32(value: int, name: str = "value") -> bytes:
    """Pack an unsigned 32-bit integer (little-endian), rejecting out-of-range values"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParameterError.invalid(name, f"expected int, got {type(value).__name__}")
    if value < 0 or value > MAX_U32:
        raise ParameterError.out_of_range(name, value, 0, MAX_U32)
    return struct.pack("<I", value)
