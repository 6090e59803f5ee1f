from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Protocol, Sequence

import numpy as np


DEFAULT_BITS = 64

DistanceFn = Callable[[Any, Any], int]


class Distance(Protocol):
    """Anything with a ``distance(a, b) -> int`` method.

    Implementations must be a true metric (identity, symmetry, triangle
    inequality); the tree relies on it for pruning and does not check it.
    """

    def distance(self, a: Any, b: Any) -> int:
        ...


def _bit_width(a: Any, b: Any) -> int | None:
    for v in (a, b):
        if isinstance(v, np.integer):
            return int(np.iinfo(v.dtype).bits)
    return None


def hamming(a: int, b: int, bits: int | None = None) -> int:
    """Number of differing bits between two integers.

    numpy scalars are compared at their dtype width; plain ints at ``bits``
    if given, otherwise unbounded (or ``DEFAULT_BITS`` when either is negative).
    """
    if bits is None:
        bits = _bit_width(a, b)
    x = int(a) ^ int(b)
    if bits is None and x < 0:
        bits = DEFAULT_BITS
    if bits is not None:
        x &= (1 << bits) - 1
    return x.bit_count()


def levenshtein(a: Sequence[Hashable] | str, b: Sequence[Hashable] | str) -> int:
    """Pure-Python Levenshtein distance.

    Supports either strings (compared per code point) or token lists.
    """
    if a == b:
        return 0
    a_seq = list(a)
    b_seq = list(b)
    if not a_seq:
        return len(b_seq)
    if not b_seq:
        return len(a_seq)

    # single cached row over the shorter sequence
    if len(a_seq) > len(b_seq):
        a_seq, b_seq = b_seq, a_seq
    cache = list(range(1, len(a_seq) + 1))
    res = 0
    for ib, cb in enumerate(b_seq):
        res = ib
        a_dist = ib
        for ia, ca in enumerate(a_seq):
            b_dist = a_dist if ca == cb else a_dist + 1
            a_dist = cache[ia]
            if a_dist > res:
                res = res + 1 if b_dist > res else b_dist
            elif b_dist > a_dist:
                res = a_dist + 1
            else:
                res = b_dist
            cache[ia] = res
    return res


@dataclass(frozen=True)
class HammingDistance:
    bits: int | None = None

    name = "hamming"

    def distance(self, a: int, b: int) -> int:
        return hamming(a, b, self.bits)

    def __call__(self, a: int, b: int) -> int:
        return self.distance(a, b)


@dataclass(frozen=True)
class LevenshteinDistance:
    name = "levenshtein"

    def distance(self, a: Sequence[Hashable] | str, b: Sequence[Hashable] | str) -> int:
        return levenshtein(a, b)

    def __call__(self, a: Sequence[Hashable] | str, b: Sequence[Hashable] | str) -> int:
        return self.distance(a, b)


METRICS: dict[str, type] = {
    HammingDistance.name: HammingDistance,
    LevenshteinDistance.name: LevenshteinDistance,
}


def get_metric(name: str, **kwargs: Any) -> HammingDistance | LevenshteinDistance:
    cls = METRICS.get(name)
    if cls is None:
        raise ValueError(f"Unknown metric: {name!r} (expected one of {sorted(METRICS)})")
    return cls(**kwargs)


def metric_name(metric: Any) -> str | None:
    name = getattr(metric, "name", None)
    return name if name in METRICS and isinstance(metric, METRICS[name]) else None


def resolve_distance(metric: Distance | DistanceFn) -> DistanceFn:
    """Turn a metric object or a plain function into a two-argument callable."""
    fn = getattr(metric, "distance", None)
    if callable(fn):
        return fn
    if callable(metric):
        return metric
    raise TypeError(f"Metric must be callable or define distance(a, b), got {type(metric).__name__}")
