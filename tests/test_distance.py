import numpy as np
import pytest

from bktree.distance import (
    HammingDistance,
    LevenshteinDistance,
    get_metric,
    hamming,
    levenshtein,
    resolve_distance,
)


def test_levenshtein_known_values():
    assert levenshtein("book", "boo") == 1
    assert levenshtein("book", "cook") == 1
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "") == 3
    assert levenshtein("abc", "abc") == 0
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("flaw", "lawn") == 2


def test_levenshtein_symmetric():
    words = ["book", "books", "boo", "boon", "cook", "cake", "cape", "cart", "", "saturday", "sunday"]
    for a in words:
        assert levenshtein(a, a) == 0
        for b in words:
            assert levenshtein(a, b) == levenshtein(b, a)


def test_levenshtein_counts_code_points():
    assert levenshtein("café", "cafe") == 1
    assert levenshtein("日本語", "日本") == 1
    assert levenshtein("naïve", "naïve") == 0


def test_levenshtein_tokens():
    assert levenshtein(["a", "b", "c"], ["a", "c"]) == 1
    assert levenshtein(("set", "red", "in"), ("set", "blue", "in")) == 1


def test_hamming_known_values():
    assert hamming(0b1101, 0b1111) == 1
    assert hamming(15, 13) == 1
    assert hamming(0, 0) == 0
    assert hamming(0, 0xFF) == 8


def test_hamming_symmetric():
    values = [0, 1, 4, 5, 13, 14, 15, 255, 1 << 40]
    for a in values:
        assert hamming(a, a) == 0
        for b in values:
            assert hamming(a, b) == hamming(b, a)


def test_hamming_fixed_width():
    assert hamming(-1, 0) == 64
    assert hamming(-1, 0, bits=32) == 32
    assert hamming(np.int8(-1), np.int8(0)) == 8
    assert hamming(np.uint16(0xFFFF), np.uint16(0)) == 16
    assert HammingDistance(bits=4).distance(0xFF, 0) == 4


def test_metric_objects_are_callable():
    assert LevenshteinDistance()("book", "boo") == 1
    assert HammingDistance()(13, 15) == 1


def test_get_metric():
    assert isinstance(get_metric("levenshtein"), LevenshteinDistance)
    assert get_metric("hamming", bits=8) == HammingDistance(bits=8)
    with pytest.raises(ValueError):
        get_metric("cosine")


def test_resolve_distance():
    assert resolve_distance(LevenshteinDistance())("a", "b") == 1
    assert resolve_distance(lambda a, b: abs(a - b))(3, 7) == 4
    with pytest.raises(TypeError):
        resolve_distance(42)
