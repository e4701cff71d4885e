"""Shared fixtures for building small hand-made filters."""
from typing import Dict, Sequence

import pytest

from core.compression.base2p15 import encode
from core.estimation import spectral_filter
from core.estimation.spectral_filter import SpectralFilter


def pack_counters(counters: Sequence[int], width: int) -> str:
    return "".join(format(counter, f"0{width}b") for counter in counters)


def make_filter(counters: Sequence[int], width: int = 4, hash_count: int = 1,
                title: str = "doc", url: str = "/doc") -> SpectralFilter:
    return SpectralFilter(
        counters_encoded=encode(pack_counters(counters, width)),
        hash_count=hash_count,
        counter_width=width,
        slot_count=len(counters),
        title=title,
        url=url,
    )


@pytest.fixture
def stub_hash(monkeypatch):
    """Route words to fixed slots: stub_hash({"a": 1}) makes every probe of 'a' hit slot 1."""

    def install(slots: Dict[str, int]):
        def fake_hash(key, seed=0):
            return slots.get(key, 0)

        monkeypatch.setattr(spectral_filter, "murmurhash3_x86_32", fake_hash)
        return fake_hash

    return install


@pytest.fixture
def filter_factory():
    return make_filter
