# core/preprocessing/index_builder.py
"""
Spectral Bloom Filter Index Builder
===================================
Offline builder for the search index: one counting bloom filter per document,
sized for a target false positive rate, serialized as base-2^15 records (see
core/search/search_index_format.py).

Phases:
1. Tokenize each document body into term frequencies (unless pre-counted)
2. Optionally compress frequencies with width minimization
3. Fill one filter per document and encode its counter array
"""
import logging
import math
import time
import numpy as np
from tqdm import tqdm
from typing import Any, Dict, List, Mapping, Sequence, Tuple
from config import DEFAULT_COUNTER_WIDTH, DEFAULT_FALSE_POSITIVE_RATE, MAX_COUNTER_WIDTH
from core.compression import base2p15
from core.estimation.spectral_filter import SpectralFilter
from core.hashing.murmur3 import hash_slots
from core.preprocessing.tokenizer import term_frequencies
from core.preprocessing.width_minimizer import minimize_width

logger = logging.getLogger(__name__)

def optimal_size(n_unique_tokens: int, false_positive_rate: float) -> Tuple[int, int]:
    """
    Compute (slot_count, hash_count) for a filter holding n_unique_tokens words.

    Uses the standard bloom filter formulae:
        m = -n * ln(p) / ln(2)^2
        k = m / n * ln(2)

    An empty document still gets one slot and one probe so its record stays valid.
    """
    if not 0.0 < false_positive_rate < 1.0:
        raise ValueError(f"False positive rate must be in (0, 1), got {false_positive_rate}")
    if n_unique_tokens <= 0:
        return 1, 1

    sbf_size = -(n_unique_tokens * math.log(false_positive_rate)) / (math.log(2) ** 2)
    n_hash_functions = (sbf_size / n_unique_tokens) * math.log(2)
    return max(1, math.ceil(sbf_size)), max(1, math.ceil(n_hash_functions))


class CountingFilterBuilder:
    """
    Mutable counting bloom filter used while building the index.

    Counters saturate at 2^width - 1 instead of overflowing.
    """

    def __init__(self, slot_count: int, hash_count: int, width: int = DEFAULT_COUNTER_WIDTH):
        if slot_count <= 0 or hash_count <= 0:
            raise ValueError(f"slot_count and hash_count must be positive, got {slot_count}, {hash_count}")
        if not 1 <= width <= MAX_COUNTER_WIDTH:
            raise ValueError(f"Counter width must be between 1 and {MAX_COUNTER_WIDTH}, got {width}")
        self.slot_count = slot_count
        self.hash_count = hash_count
        self.width = width
        self.counters = np.zeros(slot_count, dtype=np.uint32)

    @classmethod
    def from_frequencies(cls, term_frequency: Mapping[str, int],
                         false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
                         width: int = DEFAULT_COUNTER_WIDTH) -> "CountingFilterBuilder":
        """Size a filter for term_frequency and insert every term."""
        slot_count, hash_count = optimal_size(len(term_frequency), false_positive_rate)
        builder = cls(slot_count, hash_count, width)
        for word, frequency in term_frequency.items():
            builder.insert(word, frequency)
        return builder

    @property
    def max_counter(self) -> int:
        return (1 << self.width) - 1

    def insert(self, word: str, frequency: int = 1):
        """
        Add frequency occurrences of word with a conservative update: only
        probe slots below the new minimum are raised.
        """
        if frequency < 0:
            raise ValueError(f"Frequency of '{word}' must not be negative, got {frequency}")
        slots = hash_slots(word, self.hash_count, self.slot_count)
        current = int(self.counters[slots].min())
        value = min(current + int(frequency), self.max_counter)
        self.counters[slots] = np.maximum(self.counters[slots], value)

    def get_frequency(self, word: str) -> int:
        slots = hash_slots(word, self.hash_count, self.slot_count)
        return int(self.counters[slots].min())

    def as_bit_string(self) -> str:
        """Counters packed back to back, width bits each, MSB first."""
        return "".join(format(int(counter), f"0{self.width}b") for counter in self.counters)

    def encode(self) -> str:
        return base2p15.encode(self.as_bit_string())

    def to_filter(self, title: str = "", url: str = "") -> SpectralFilter:
        """Freeze into the read-only filter used by the search index."""
        return SpectralFilter(
            counters_encoded=self.encode(),
            hash_count=self.hash_count,
            counter_width=self.width,
            slot_count=self.slot_count,
            title=title,
            url=url
        )

    def to_record(self, title: str = "", url: str = "") -> Dict[str, Any]:
        return self.to_filter(title, url).to_record()


def prepare_documents(documents: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Attach term frequencies to raw documents.

    Each document needs a 'title' and 'url' plus either a pre-computed
    'term_frequency' mapping or a 'body' to tokenize.
    """
    prepared = []
    for position, document in enumerate(documents):
        if "term_frequency" in document:
            frequencies = dict(document["term_frequency"])
        elif "body" in document:
            frequencies = term_frequencies(document["body"] or "")
        else:
            raise ValueError(f"Document {position} has neither 'body' nor 'term_frequency'")

        prepared.append({
            "title": str(document.get("title", "")),
            "url": str(document.get("url", "")),
            "term_frequency": frequencies
        })
    return prepared


def build_records(documents: Sequence[Mapping[str, Any]],
                  false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
                  width: int = DEFAULT_COUNTER_WIDTH,
                  minimize: bool = False,
                  show_progress: bool = False) -> List[Dict[str, Any]]:
    """
    Build one encoded filter record per document, preserving document order.

    Args:
        documents: Raw documents (see prepare_documents)
        false_positive_rate: Target false positive rate of each filter
        width: Bits per counter (estimates saturate at 2^width - 1)
        minimize: Replace frequencies by their cross-document rank first
        show_progress: Display a tqdm progress bar
    """
    start_time = time.time()
    prepared = prepare_documents(documents)
    if minimize:
        prepared = minimize_width(prepared)

    records = []
    for document in tqdm(prepared, unit="docs", disable=not show_progress):
        builder = CountingFilterBuilder.from_frequencies(
            document["term_frequency"], false_positive_rate, width
        )
        record = builder.to_record(document["title"], document["url"])
        logger.debug(
            f"Built filter for '{document['title']}': {len(document['term_frequency'])} words, "
            f"{builder.slot_count} slots, {builder.hash_count} probes"
        )
        records.append(record)

    encoded_chars = sum(len(record["sbf_base2p15"]) for record in records)
    logger.info(
        f"Built {len(records)} filters ({encoded_chars:,} encoded chars) "
        f"in {time.time() - start_time:.2f}s"
    )
    return records
