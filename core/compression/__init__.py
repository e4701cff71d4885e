# core/compression/__init__.py
"""
Compression Package
"""
from .base2p15 import (
    InvalidEncodingError,
    bit_length,
    decode,
    decode_range,
    encode
)

__all__ = [
    'InvalidEncodingError',
    'bit_length',
    'decode',
    'decode_range',
    'encode'
]
