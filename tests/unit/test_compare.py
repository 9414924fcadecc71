"""Tests for numeric-aware comparison and sorting."""

from __future__ import annotations

import itertools
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pytest

from numsort import (
    CaseSensitivity,
    CodepointCollator,
    ComparisonConfig,
    NumericStringComparator,
    Ordering,
    compare,
    get_comparator,
    natural_sort_key,
    sort_numeric,
)

pytestmark = pytest.mark.unit

NUMERIC = ComparisonConfig(numeric=True)
LEXICOGRAPHIC = ComparisonConfig(numeric=False)
INSENSITIVE = ComparisonConfig(case_sensitivity=CaseSensitivity.INSENSITIVE)

SAMPLES = [
    "",
    "a",
    "A",
    "a1",
    "a01",
    "a001",
    "a2",
    "a10",
    "a-",
    "a b",
    "ab",
    "Ab",
    "1",
    "01",
    "10",
    "1a",
    " 1",
    "-5",
    "item10",
    "item2",
    "item02x",
    "x9y9",
    "x9y10",
    "x10y1",
    "ä",
    "z",
]

CONFIGS = [
    NUMERIC,
    LEXICOGRAPHIC,
    INSENSITIVE,
    ComparisonConfig(numeric=False, case_sensitivity="insensitive"),
]


def test_sort_orders_embedded_numbers_by_value():
    assert sort_numeric(["item10", "item2", "item1"], NUMERIC) == [
        "item1",
        "item2",
        "item10",
    ]


def test_lexicographic_sort_compares_digits_as_characters():
    assert sort_numeric(["item10", "item2", "item1"], LEXICOGRAPHIC) == [
        "item1",
        "item10",
        "item2",
    ]


def test_leading_zeros_tie_break_on_run_length():
    assert sort_numeric(["a007", "a7", "a10"], NUMERIC) == ["a7", "a007", "a10"]
    assert compare("a7", "a007") is Ordering.LESS
    assert compare("a007", "a10") is Ordering.LESS


def test_zero_runs_compare_by_length():
    assert sort_numeric(["000", "0", "00", "1"]) == ["0", "00", "000", "1"]


def test_multiple_digit_runs_compare_pairwise():
    assert sort_numeric(["v1.10", "v1.9", "v1.2", "v0.99"]) == [
        "v0.99",
        "v1.2",
        "v1.9",
        "v1.10",
    ]


def test_huge_digit_runs_compare_by_magnitude():
    small = "x" + "9" * 5000
    large = "x1" + "0" * 5000
    assert compare(small, large) is Ordering.LESS
    assert compare(large, small) is Ordering.GREATER


def test_prefix_sorts_first():
    assert compare("item", "item1") is Ordering.LESS
    assert compare("", "a") is Ordering.LESS
    assert compare("a1", "a1b") is Ordering.LESS


def test_mixed_segment_kinds_use_character_codes():
    # "-" and " " are below "0", letters above
    assert compare("-5", "5") is Ordering.LESS
    assert compare(" 1", "1") is Ordering.LESS
    assert compare("1", "a") is Ordering.LESS
    assert compare(" x", "5") is Ordering.LESS
    assert compare("7", "x7") is Ordering.LESS


def test_text_runs_at_same_position_compare_as_text():
    # "a-" and "a" are both text runs, so the shorter prefix wins
    assert compare("a-", "a1") is Ordering.GREATER
    assert compare("x-1", "x5") is Ordering.GREATER
    assert compare("a1", "ab") is Ordering.LESS


def test_band_below_digits_precedes_collation_of_text_runs():
    class PunctuationLastCollator:
        def sort_key(self, text):
            return tuple((not char.isalpha(), char) for char in text)

    comparator = NumericStringComparator(collator=PunctuationLastCollator())
    assert comparator.compare("-x", "a") is Ordering.LESS
    assert comparator.compare("a-", "ab") is Ordering.GREATER


def test_case_sensitive_orders_by_code_point():
    assert sort_numeric(["b", "A", "a", "B"]) == ["A", "B", "a", "b"]
    assert compare("a", "A") is Ordering.GREATER


def test_case_insensitive_ties_are_stable():
    assert sort_numeric(["b", "A", "a", "B"], INSENSITIVE) == ["A", "a", "b", "B"]
    assert sort_numeric(["a", "A"], INSENSITIVE) == ["a", "A"]
    assert compare("File2", "file2", INSENSITIVE) is Ordering.EQUAL


def test_reverse_keeps_equal_items_in_input_order():
    assert sort_numeric(["a", "A", "b2", "b10"], INSENSITIVE, reverse=True) == [
        "b10",
        "b2",
        "a",
        "A",
    ]


def test_sort_with_key_function():
    @dataclass
    class Track:
        name: str

    tracks = [Track("Track 10"), Track("Track 9"), Track("Track 1")]
    result = sort_numeric(tracks, key=lambda track: track.name)
    assert [track.name for track in result] == ["Track 1", "Track 9", "Track 10"]


def test_sort_returns_new_list_and_keeps_input():
    items = ["b2", "b1"]
    result = sort_numeric(items)
    assert result == ["b1", "b2"]
    assert items == ["b2", "b1"]
    assert result is not items


def test_sort_accepts_any_iterable():
    assert sort_numeric(iter(("x3", "x20", "x1"))) == ["x1", "x3", "x20"]


def test_empty_and_single_element():
    assert sort_numeric([]) == []
    assert sort_numeric(["only7"]) == ["only7"]


@pytest.mark.parametrize("config", CONFIGS)
def test_sort_is_idempotent(config):
    once = sort_numeric(SAMPLES, config)
    assert sort_numeric(once, config) == once


@pytest.mark.parametrize("config", CONFIGS)
def test_compare_is_reflexive(config):
    for text in SAMPLES:
        assert compare(text, text, config) is Ordering.EQUAL


@pytest.mark.parametrize("config", CONFIGS)
def test_compare_is_antisymmetric(config):
    for a, b in itertools.product(SAMPLES, repeat=2):
        assert compare(a, b, config) is compare(b, a, config).reverse()


@pytest.mark.parametrize("config", CONFIGS)
def test_compare_is_transitive(config):
    for a, b, c in itertools.product(SAMPLES, repeat=3):
        ab = compare(a, b, config)
        bc = compare(b, c, config)
        if ab is bc and ab is not Ordering.EQUAL:
            assert compare(a, c, config) is ab
        if ab is Ordering.EQUAL:
            assert compare(a, c, config) is bc


@pytest.mark.parametrize("config", CONFIGS)
def test_sort_agrees_with_compare(config):
    result = sort_numeric(SAMPLES, config)
    for left, right in zip(result, result[1:]):
        assert compare(left, right, config) is not Ordering.GREATER


def test_sensitive_mode_only_equal_for_identical_strings():
    for a, b in itertools.product(SAMPLES, repeat=2):
        if a != b:
            assert compare(a, b) is not Ordering.EQUAL


def test_sort_is_stable_for_equal_ranked_items():
    items = ["B1", "a1", "b1", "A1", "a01"]
    assert sort_numeric(items, INSENSITIVE) == ["a1", "A1", "a01", "B1", "b1"]


def test_ordering_reverse():
    assert Ordering.LESS.reverse() is Ordering.GREATER
    assert Ordering.GREATER.reverse() is Ordering.LESS
    assert Ordering.EQUAL.reverse() is Ordering.EQUAL


def test_comparator_with_custom_collator():
    class ReversedCollator:
        def sort_key(self, text):
            return tuple(-ord(char) for char in text)

    comparator = NumericStringComparator(collator=ReversedCollator())
    assert comparator.sort(["a1", "b1", "c1"]) == ["c1", "b1", "a1"]
    assert comparator.compare("a2", "a10") is Ordering.LESS


def test_comparator_defaults():
    comparator = NumericStringComparator()
    assert comparator.config == ComparisonConfig()
    assert isinstance(comparator.collator, CodepointCollator)


def test_get_comparator_is_shared_per_config():
    assert get_comparator(ComparisonConfig()) is get_comparator(ComparisonConfig())
    assert get_comparator(NUMERIC) is not get_comparator(LEXICOGRAPHIC)


def test_natural_sort_key_handles_any_value():
    assert natural_sort_key(None) == natural_sort_key("")
    values = [10, 2, None, "1"]
    assert sorted(values, key=natural_sort_key) == [None, "1", 2, 10]


def test_concurrent_sorts_share_one_comparator():
    comparator = get_comparator(INSENSITIVE)
    expected = comparator.sort(SAMPLES)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: comparator.sort(SAMPLES), range(16)))
    assert all(result == expected for result in results)
