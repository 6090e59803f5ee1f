from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from bktree.distance import METRICS, get_metric


def load_yaml(path: Path) -> dict[str, Any]:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class TreeConfig:
    metric: str = "levenshtein"
    max_dist: int = 2
    hamming_bits: int | None = None
    lowercase: bool = False

    def make_metric(self):
        if self.metric == "hamming":
            return get_metric("hamming", bits=self.hamming_bits)
        return get_metric(self.metric)


def load_tree_config(path: Path) -> TreeConfig:
    data = load_yaml(path) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    known = {f.name for f in fields(TreeConfig)}
    cfg = TreeConfig(**{k: v for k, v in data.items() if k in known})
    if cfg.metric not in METRICS:
        raise ValueError(f"Unknown metric in {path}: {cfg.metric!r} (expected one of {sorted(METRICS)})")
    if cfg.hamming_bits is not None and int(cfg.hamming_bits) < 1:
        raise ValueError(f"hamming_bits in {path} must be >= 1, got {cfg.hamming_bits!r}")
    return TreeConfig(
        metric=str(cfg.metric),
        max_dist=int(cfg.max_dist),
        hamming_bits=(int(cfg.hamming_bits) if cfg.hamming_bits is not None else None),
        lowercase=bool(cfg.lowercase),
    )
