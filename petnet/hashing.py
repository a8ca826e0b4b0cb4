"""Hash functions used by the hash table and the connection maps."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

GOLDEN_RATIO_PRIME_32 = 0x9E370001
GOLDEN_RATIO_PRIME_64 = 0x9E37FFFFFFFC0001


def hash_u32(val: int) -> int:
    """Multiplicative hash of a 32-bit unsigned integer."""
    return ((val & _MASK32) * GOLDEN_RATIO_PRIME_32) & _MASK32


def hash_ptr(val: int) -> int:
    """Hash a 64-bit pointer-sized integer down to 32 bits.

    This is the shift-and-add form of multiplying by the 64-bit golden
    ratio prime; the high 32 bits of the product are returned.
    """
    value = val & _MASK64
    n = value

    n = (n << 18) & _MASK64
    value = (value - n) & _MASK64
    n = (n << 33) & _MASK64
    value = (value - n) & _MASK64
    n = (n << 3) & _MASK64
    value = (value + n) & _MASK64
    n = (n << 3) & _MASK64
    value = (value - n) & _MASK64
    n = (n << 4) & _MASK64
    value = (value + n) & _MASK64
    n = (n << 2) & _MASK64
    value = (value + n) & _MASK64

    return (value >> 32) & _MASK32


def hash_buffer(data: bytes) -> int:
    """ELF-style hash of a byte buffer, with each byte's index mixed in."""
    value = 0
    for index, byte in enumerate(bytes(data)):
        value = ((value << 4) + byte + index) & _MASK32
        top = value & 0xF0000000
        if top:
            value ^= top >> 24
        value &= ~top & _MASK32
    return value


def mix_hash(value: int) -> int:
    """Scramble a 32-bit hash to guard against weak hash functions."""
    i = value & _MASK32
    i = (i + (~(i << 9) & _MASK32)) & _MASK32
    i ^= ((i >> 14) | (i << 18)) & _MASK32
    i = (i + (i << 4)) & _MASK32
    i ^= ((i >> 10) | (i << 22)) & _MASK32
    return i & _MASK32