# core/preprocessing/tokenizer.py
"""
Document Tokenizer
==================
Deterministic tokenization shared by the index builder (term frequencies of
each document) and the search front ends (query words). Both sides must
produce identical tokens or lookups silently miss.
"""
import re
import unidecode
from collections import Counter
from functools import lru_cache
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional
from config import PathConfig

_NON_ALPHA = re.compile(r"[^A-Za-z]+")

@lru_cache(maxsize=None)
def load_stopwords(path: Optional[str] = None) -> FrozenSet[str]:
    """Load whitespace separated stopwords (defaults to the bundled list)."""
    stopwords_path = Path(path) if path else PathConfig.get_stopwords_file()
    with open(stopwords_path, "r", encoding="utf-8") as f:
        return frozenset(word.lower() for word in f.read().split())

def normalize_text(text: str) -> str:
    """
    Normalize text before splitting:
    - Folding Unicode to ASCII (eg. "Café" → "Cafe")
    - Replacing every non-alphabetic character with a space
    - Converting to lowercase
    - Collapsing whitespace

    ASCII folding also keeps hashing unambiguous: every token character
    is a single byte.
    """
    if not text:
        return ""

    text = unidecode.unidecode(text)
    text = _NON_ALPHA.sub(" ", text)
    return " ".join(text.lower().split())

def tokenize(text: str, remove_stopwords: bool = True) -> List[str]:
    """
    Split text into lowercase alphabetic words.

    Args:
        text: Raw document body or query string
        remove_stopwords: Drop words from the stopword list

    Returns:
        Tokens in their original order (duplicates kept)
    """
    normalized = normalize_text(text)
    if not normalized:
        return []

    tokens = normalized.split()
    if remove_stopwords:
        stopwords = load_stopwords()
        tokens = [token for token in tokens if token not in stopwords]
    return tokens

def term_frequencies(text: str, remove_stopwords: bool = True) -> Dict[str, int]:
    """Count occurrences of each token in text"""
    return dict(Counter(tokenize(text, remove_stopwords=remove_stopwords)))
