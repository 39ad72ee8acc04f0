"""
Deterministic per-mask colors.

A mask's color is derived from its position in the mask list, so the
same mask set is always drawn with the same colors.
"""

from typing import Tuple

_UINT32_MASK = 0xFFFFFFFF


def hash_uint32(value: int) -> int:
    """
    Avalanche mix of a 32-bit integer.

    Flipping one input bit flips about half of the output bits, so
    neighbouring indices map to unrelated-looking values.

    Args:
        value: Non-negative integer (only the low 32 bits are used)

    Returns:
        Mixed value in [0, 2**32)
    """
    x = value & _UINT32_MASK
    x = (x ^ 61) ^ (x >> 16)
    x = (x + (x << 3)) & _UINT32_MASK
    x ^= x >> 4
    x = (x * 0x27D4EB2D) & _UINT32_MASK
    x ^= x >> 15
    return x


def color_for(index: int) -> Tuple[int, int, int]:
    """
    Get the RGB color of the mask at the given list index.

    Args:
        index: Mask index in the mask list

    Returns:
        (r, g, b) tuple, each channel in [0, 255]
    """
    r = hash_uint32(index) & 0xFF
    g = hash_uint32(index >> 8) & 0xFF
    b = hash_uint32(index >> 16) & 0xFF
    return (r, g, b)
