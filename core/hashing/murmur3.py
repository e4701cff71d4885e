# core/hashing/murmur3.py
"""
MurmurHash3 (x86, 32-bit)
=========================
Pure Python port of Austin Appleby's MurmurHash3_x86_32. The index builder
places every term count with this exact function, so the searcher must
reproduce it bit-for-bit. Every intermediate value is masked to 32 bits.

Keys given as str are hashed one byte per UTF-16 code unit (its low 8 bits),
which is how the browser-side searcher reads its keys; characters outside the
Basic Multilingual Plane contribute two bytes, one per surrogate. Tokens are
folded to ASCII before hashing (see core/preprocessing/tokenizer.py), so for
indexed words this is the same as hashing their UTF-8 bytes.
"""
import struct
from typing import List, Union

MASK_32 = 0xFFFFFFFF

C1 = 0xCC9E2D51
C2 = 0x1B873593
R1 = 15
R2 = 13
M = 5
N = 0xE6546B64

def _rotl32(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & MASK_32

def _mix_k1(k1: int) -> int:
    """Scramble one 32-bit block before it is folded into the state"""
    k1 = (k1 * C1) & MASK_32
    k1 = _rotl32(k1, R1)
    return (k1 * C2) & MASK_32

def fmix32(h: int) -> int:
    """Final avalanche: forces all bits of the state to affect each other"""
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & MASK_32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & MASK_32
    h ^= h >> 16
    return h

def _key_bytes(key: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    # Low byte of each UTF-16 code unit, the way charCodeAt() reads a JS string
    units = struct.iter_unpack("<H", key.encode("utf-16-le", "surrogatepass"))
    return bytes(unit & 0xFF for (unit,) in units)

def murmurhash3_x86_32(key: Union[str, bytes, bytearray], seed: int = 0) -> int:
    """
    Hash a key with MurmurHash3_x86_32.

    Args:
        key: Token to hash (str or bytes)
        seed: Unsigned 32-bit seed (the probe index when addressing a filter)

    Returns:
        Unsigned 32-bit hash value
    """
    data = _key_bytes(key)
    length = len(data)
    remainder = length & 3
    block_end = length - remainder

    h1 = seed & MASK_32

    for (k1,) in struct.iter_unpack("<I", data[:block_end]):
        h1 ^= _mix_k1(k1)
        h1 = _rotl32(h1, R2)
        h1 = (h1 * M + N) & MASK_32

    # Tail: the last 1-3 bytes, least significant byte first
    k1 = 0
    if remainder >= 3:
        k1 ^= data[block_end + 2] << 16
    if remainder >= 2:
        k1 ^= data[block_end + 1] << 8
    if remainder >= 1:
        k1 ^= data[block_end]
        h1 ^= _mix_k1(k1)

    h1 ^= length & MASK_32
    return fmix32(h1)

def hash_slots(key: Union[str, bytes], hash_count: int, slot_count: int) -> List[int]:
    """
    Counter slots probed for a key: one per seed in range(hash_count).
    Shared by the builder and the reader so both address the same slots.
    """
    return [murmurhash3_x86_32(key, seed) % slot_count for seed in range(hash_count)]
