# core/search/search_index.py
"""
Search Index
============
Ranks documents against a tokenized query by summing, per document, the
estimated frequency of every query word. The index is an immutable tuple of
SpectralFilter built once from the records produced by the index builder, so
concurrent searches need no locking.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple
from core.compression.base2p15 import InvalidEncodingError
from core.estimation.spectral_filter import (
    SpectralFilter,
    InvalidRecordError,
    SlotIndexOutOfRangeError
)

logger = logging.getLogger(__name__)

# Failures that disqualify a single filter without aborting the search
FILTER_ERRORS = (InvalidEncodingError, SlotIndexOutOfRangeError)

ErrorCallback = Callable[[SpectralFilter, Exception], None]


class IndexUnusableError(RuntimeError):
    """Raised when records were supplied but none of them forms a usable filter."""
    pass


@dataclass(frozen=True)
class ResultEntry:
    """A single ranked document."""
    title: str
    url: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SearchIndex:
    """Ordered, read-only collection of per-document spectral bloom filters."""

    def __init__(self, filters: Iterable[SpectralFilter] = ()):
        self._filters: Tuple[SpectralFilter, ...] = tuple(filters)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "SearchIndex":
        """
        Build the index from builder records, skipping records that cannot
        form a filter.

        Raises:
            IndexUnusableError: Records were given but every one was rejected
        """
        filters = []
        for position, record in enumerate(records):
            try:
                filters.append(SpectralFilter.from_record(record))
            except InvalidRecordError as e:
                logger.warning(f"Skipping index record {position}: {e}")

        if records and not filters:
            raise IndexUnusableError(f"None of the {len(records)} index records is usable")

        logger.debug(f"Loaded {len(filters)} of {len(records)} index records")
        return cls(filters)

    @property
    def filters(self) -> Tuple[SpectralFilter, ...]:
        return self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[SpectralFilter]:
        return iter(self._filters)

    def score(self, sbf: SpectralFilter, words: Sequence[str]) -> int:
        """Sum of estimated frequencies of words in one document (0 for no words)."""
        return sum(sbf.get_frequency(word) for word in words)

    def search(self, words: Sequence[str], limit: Optional[int] = None,
               on_error: Optional[ErrorCallback] = None) -> List[ResultEntry]:
        """
        Rank documents for already tokenized query words.

        Documents scoring 0 are dropped. Results are sorted by score, highest
        first; equal scores keep their order in the index.

        A filter that fails to decode is skipped and reported through on_error
        (and the log) instead of failing the whole search.

        Args:
            words: Query words; an empty sequence yields no results
            limit: Optional cap on the number of results
            on_error: Called with (filter, exception) for each skipped filter
        """
        words = list(words)
        if not words:
            return []

        results = []
        for sbf in self._filters:
            try:
                score = self.score(sbf, words)
            except FILTER_ERRORS as e:
                logger.warning(f"Skipping document '{sbf.title}' ({sbf.url}): {e}")
                if on_error is not None:
                    on_error(sbf, e)
                continue

            if score > 0:
                results.append(ResultEntry(title=sbf.title, url=sbf.url, score=score))

        # list.sort is stable, so ties keep index order
        results.sort(key=lambda entry: entry.score, reverse=True)

        if limit is not None:
            results = results[:max(0, limit)]
        return results


def search(index: SearchIndex, words: Sequence[str], **kwargs) -> List[ResultEntry]:
    """Module-level shortcut for SearchIndex.search()"""
    return index.search(words, **kwargs)
