# core/estimation/__init__.py
"""
Estimation Package
"""
from .spectral_filter import (
    SpectralFilter,
    InvalidRecordError,
    SlotIndexOutOfRangeError
)

__all__ = [
    'SpectralFilter',
    'InvalidRecordError',
    'SlotIndexOutOfRangeError'
]
