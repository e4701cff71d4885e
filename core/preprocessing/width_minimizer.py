# core/preprocessing/width_minimizer.py
"""
Shrink term frequencies so they fit in narrow counters.

Raw counts are only used to rank documents against each other, so each count
can be replaced by its rank among the distinct counts of the same word across
all documents. A word seen 1, 40 and 900 times in three documents becomes
1, 3 and 5 (rank * WIDTH_RANK_MULTIPLIER + 1), which still orders the
documents the same way but needs far fewer bits.
"""
from bisect import bisect_left
from collections import defaultdict
from typing import Dict, List, Mapping, Sequence
from config import WIDTH_RANK_MULTIPLIER

def distinct_frequencies(documents: Sequence[Mapping]) -> Dict[str, List[int]]:
    """Sorted distinct frequencies of every word across all documents"""
    per_word = defaultdict(set)
    for document in documents:
        for word, frequency in document["term_frequency"].items():
            per_word[word].add(frequency)
    return {word: sorted(frequencies) for word, frequencies in per_word.items()}

def minimize_width(documents: Sequence[Mapping],
                   multiplier: int = WIDTH_RANK_MULTIPLIER) -> List[Dict]:
    """
    Replace every term frequency by rank * multiplier + 1.

    Args:
        documents: Mappings with at least a 'term_frequency' dict; other keys
                   (title, url, ...) are copied unchanged

    Returns:
        New document dicts; the input is not modified
    """
    ranks = distinct_frequencies(documents)
    minimized = []
    for document in documents:
        term_frequency = {
            word: bisect_left(ranks[word], frequency) * multiplier + 1
            for word, frequency in document["term_frequency"].items()
        }
        minimized.append({**document, "term_frequency": term_frequency})
    return minimized
