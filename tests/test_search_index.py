"""Ranking documents across the whole index."""
import threading

import pytest

from core.estimation.spectral_filter import InvalidRecordError, SpectralFilter
from core.search.search_index import (
    IndexUnusableError,
    ResultEntry,
    SearchIndex,
    search,
)


@pytest.fixture
def routed(stub_hash):
    # word -> slot for every probe
    stub_hash({"a": 1, "b": 0, "x": 0, "y": 1})


def test_single_filter_scenario(filter_factory, routed):
    index = SearchIndex([filter_factory([0, 3, 0, 0], title="Doc", url="/doc")])

    assert index.search(["a"]) == [ResultEntry(title="Doc", url="/doc", score=3)]
    assert index.search(["b"]) == []


def test_higher_score_ranks_first(filter_factory, routed):
    low = filter_factory([2, 0], title="low", url="/low")
    high = filter_factory([5, 0], title="high", url="/high")
    results = SearchIndex([low, high]).search(["x"])

    assert [r.title for r in results] == ["high", "low"]
    assert [r.score for r in results] == [5, 2]


def test_score_sums_every_query_word(filter_factory, routed):
    sbf = filter_factory([4, 6])
    index = SearchIndex([sbf])
    results = index.search(["x", "y", "x"])

    assert results[0].score == 4 + 6 + 4
    assert results[0].score == sum(sbf.get_frequency(w) for w in ["x", "y", "x"])


def test_equal_scores_keep_index_order(filter_factory, routed):
    filters = [filter_factory([3, 0], title=name, url=f"/{name}") for name in ("c", "a", "b")]
    filters.insert(1, filter_factory([9, 0], title="top", url="/top"))
    results = SearchIndex(filters).search(["x"])

    assert [r.title for r in results] == ["top", "c", "a", "b"]


def test_results_sorted_and_positive(filter_factory, routed):
    filters = [filter_factory([value, 15 - value], title=str(value)) for value in range(16)]
    results = SearchIndex(filters).search(["x", "x", "y"])

    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert all(score > 0 for score in scores)


def test_empty_query_returns_nothing(filter_factory, routed):
    index = SearchIndex([filter_factory([1, 1])])
    assert index.search([]) == []
    assert index.search(iter(())) == []


def test_limit_truncates_sorted_results(filter_factory, routed):
    filters = [filter_factory([n, 0], title=str(n)) for n in (1, 4, 2, 3)]
    results = SearchIndex(filters).search(["x"], limit=2)
    assert [r.score for r in results] == [4, 3]


def test_broken_filter_is_skipped_and_reported(filter_factory, routed):
    good = filter_factory([2, 0], title="good")
    corrupt = SpectralFilter("0AB", hash_count=1, counter_width=4, slot_count=2, title="corrupt")
    also_good = filter_factory([2, 0], title="also good")
    failures = []

    def record_failure(filter_, exc):
        failures.append((filter_.title, type(exc).__name__))

    index = SearchIndex([corrupt, good, also_good])
    results = index.search(["x"], on_error=record_failure)

    assert [r.title for r in results] == ["good", "also good"]
    assert failures == [("corrupt", "InvalidEncodingError")]


def test_out_of_range_slot_skips_filter(filter_factory, stub_hash):
    stub_hash({"far": 40})
    good = filter_factory([0] * 40 + [6], title="good")
    truncated = SpectralFilter(filter_factory([1, 1]).counters_encoded, hash_count=1,
                               counter_width=4, slot_count=50, title="truncated")
    failures = []

    results = SearchIndex([truncated, good]).search(["far"], on_error=lambda f, e: failures.append(e))

    assert [r.title for r in results] == ["good"]
    assert len(failures) == 1
    assert isinstance(failures[0], IndexError)


def test_from_records_skips_invalid_records(filter_factory):
    record = filter_factory([1, 2, 3], title="ok").to_record()
    index = SearchIndex.from_records([record, {"title": "broken"}, dict(record, width=0)])

    assert len(index) == 1
    assert next(iter(index)).title == "ok"


def test_from_records_raises_when_nothing_is_usable():
    with pytest.raises(IndexUnusableError):
        SearchIndex.from_records([{"title": "broken"}])


def test_from_records_accepts_an_empty_index():
    index = SearchIndex.from_records([])
    assert len(index) == 0
    assert index.search(["anything"]) == []


def test_index_is_read_only(filter_factory):
    index = SearchIndex([filter_factory([1])])
    assert isinstance(index.filters, tuple)


def test_concurrent_searches_agree(filter_factory, routed):
    index = SearchIndex([filter_factory([n % 7, n % 5], title=str(n)) for n in range(40)])
    expected = index.search(["x", "y"])
    outputs = []

    def worker():
        outputs.append(index.search(["x", "y"]))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outputs == [expected] * 8


def test_module_level_search(filter_factory, routed):
    index = SearchIndex([filter_factory([0, 3], title="Doc")])
    assert search(index, ["a"], limit=1)[0].score == 3


def test_result_entry_wire_shape():
    assert ResultEntry("T", "/u", 4).to_dict() == {"title": "T", "url": "/u", "score": 4}


@pytest.mark.parametrize("field", ["hash_count", "counter_width", "slot_count"])
def test_zero_sized_filter_cannot_enter_the_index(filter_factory, field):
    values = dict(counters_encoded=filter_factory([0, 0]).counters_encoded,
                  hash_count=1, counter_width=4, slot_count=2, title="empty")
    values[field] = 0
    with pytest.raises(InvalidRecordError):
        SearchIndex([SpectralFilter(**values), filter_factory([2, 0])])


def test_unmatched_word_never_scores_on_all_zero_filter(filter_factory, routed):
    assert SearchIndex([filter_factory([0, 0], title="empty")]).search(["x", "y"]) == []
