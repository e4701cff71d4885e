# core/preprocessing/__init__.py
"""
Preprocessing Package
"""
from .tokenizer import tokenize, term_frequencies, normalize_text
from .width_minimizer import minimize_width
from .index_builder import (
    CountingFilterBuilder,
    optimal_size,
    prepare_documents,
    build_records
)

__all__ = [
    'tokenize',
    'term_frequencies',
    'normalize_text',
    'minimize_width',
    'CountingFilterBuilder',
    'optimal_size',
    'prepare_documents',
    'build_records'
]
