# core/estimation/spectral_filter.py
"""
Read-only Spectral Bloom Filter backed by a base-2^15 encoded counter array.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping
from core.compression.base2p15 import decode, decode_range
from core.hashing.murmur3 import murmurhash3_x86_32

# Record field -> (attribute, expected type)
RECORD_FIELDS = {
    "sbf_base2p15": ("counters_encoded", str),
    "n_hash_functions": ("hash_count", int),
    "width": ("counter_width", int),
    "size": ("slot_count", int),
    "title": ("title", str),
    "url": ("url", str),
}


class InvalidRecordError(ValueError):
    """Raised when an index record is missing fields or has unusable values."""
    pass


class SlotIndexOutOfRangeError(IndexError):
    """Raised when a counter slot lies outside the encoded counter array."""
    pass


@dataclass(frozen=True)
class SpectralFilter:
    """
    Counting Bloom filter of one document, used to estimate how often a word
    occurs in it.

    Counters are fixed-width unsigned integers packed back to back into a bit
    string and encoded with base-2^15. A word is probed with hash_count seeds
    (0..hash_count-1); the minimum counter across its slots is the count-min
    estimate.

    Guarantees:
    * The estimate never undershoots the inserted count
    * There are no false negatives (but collisions can cause false positives)
    """
    counters_encoded: str
    hash_count: int
    counter_width: int
    slot_count: int
    title: str = ""
    url: str = ""

    def __post_init__(self):
        for key, (attribute, expected_type) in RECORD_FIELDS.items():
            value = getattr(self, attribute)
            # bool is an int subclass but never a valid count
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise InvalidRecordError(
                    f"Field '{key}' must be {expected_type.__name__}, got {type(value).__name__}"
                )

        for attribute in ("hash_count", "counter_width", "slot_count"):
            if getattr(self, attribute) <= 0:
                raise InvalidRecordError(f"{attribute} must be positive, got {getattr(self, attribute)}")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SpectralFilter":
        """
        Build a filter from an index record as emitted by the builder:
        {sbf_base2p15, n_hash_functions, width, size, title, url}

        Raises:
            InvalidRecordError: Missing field, wrong type or non-positive size
        """
        if not isinstance(record, Mapping):
            raise InvalidRecordError(f"Record must be a mapping, got {type(record).__name__}")

        missing = [key for key in RECORD_FIELDS if key not in record]
        if missing:
            raise InvalidRecordError(f"Record is missing field '{missing[0]}'")

        return cls(**{attribute: record[key] for key, (attribute, _) in RECORD_FIELDS.items()})

    def to_record(self) -> Dict[str, Any]:
        """Inverse of from_record()"""
        return {key: getattr(self, attribute) for key, (attribute, _) in RECORD_FIELDS.items()}

    @property
    def max_counter(self) -> int:
        """Largest value a counter can hold (2^width - 1)"""
        return (1 << self.counter_width) - 1

    def get_counter(self, i: int) -> int:
        """
        Read counter i by decoding only bits [i*width, (i+1)*width).

        Raises:
            SlotIndexOutOfRangeError: i is not a valid slot or the encoded
                array is too short to hold it
            InvalidEncodingError: The characters covering the slot are malformed
        """
        if not 0 <= i < self.slot_count:
            raise SlotIndexOutOfRangeError(f"Slot {i} outside [0, {self.slot_count})")

        start = i * self.counter_width
        end = start + self.counter_width
        try:
            bits = decode_range(self.counters_encoded, start, end)
        except IndexError as e:
            raise SlotIndexOutOfRangeError(f"Slot {i} of '{self.title}': {e}") from e
        return int(bits, 2)

    def get_counters(self) -> List[int]:
        """Decode the whole counter array at once (diagnostics and tests)."""
        bits = decode(self.counters_encoded)
        needed = self.slot_count * self.counter_width
        if len(bits) < needed:
            raise SlotIndexOutOfRangeError(
                f"Encoded array holds {len(bits)} bits, {needed} required for {self.slot_count} slots"
            )
        w = self.counter_width
        return [int(bits[i * w:(i + 1) * w], 2) for i in range(self.slot_count)]

    def get_frequency(self, word: str) -> int:
        """
        Estimate how many times word was inserted into this filter.

        Returns:
            The minimum counter across all probes; 0 if the word was (probably)
            never indexed for this document
        """
        estimate = self.max_counter
        for seed in range(self.hash_count):
            slot = murmurhash3_x86_32(word, seed) % self.slot_count
            estimate = min(estimate, self.get_counter(slot))
            if estimate == 0:
                break
        return estimate
