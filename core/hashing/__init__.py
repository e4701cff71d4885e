# core/hashing/__init__.py
"""
Hashing Package
"""
from .murmur3 import murmurhash3_x86_32, hash_slots, fmix32

__all__ = [
    'murmurhash3_x86_32',
    'hash_slots',
    'fmix32'
]
