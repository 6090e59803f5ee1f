from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from bktree.distance import Distance, DistanceFn, get_metric, metric_name
from bktree.tree import BKNode, BkTree


FORMAT_VERSION = 1

logger = logging.getLogger(__name__)


def tree_to_dict(tree: BkTree) -> dict[str, Any]:
    """Flatten a tree into an index-linked node list (root at index 0).

    Each entry is ``{"word": item, "children": [[distance, index], ...]}`` with
    children kept in insertion order. Items must be JSON values; tuple and list
    token sequences are both written as arrays and are restored as tuples.
    """
    name = metric_name(tree.dist)
    metric_args = dataclasses.asdict(tree.dist) if name is not None else {}
    nodes: list[dict[str, Any]] = []
    if tree.root is not None:
        index = {id(tree.root): 0}
        order = [tree.root]
        i = 0
        while i < len(order):
            node = order[i]
            edges = []
            for d, child in node.children.items():
                index[id(child)] = len(order)
                order.append(child)
                edges.append([d, index[id(child)]])
            nodes.append({"word": node.word, "children": edges})
            i += 1
    return {
        "format": FORMAT_VERSION,
        "metric": name,
        "metric_args": metric_args,
        "size": len(nodes),
        "nodes": nodes,
    }


def _word(w: Any) -> Any:
    # JSON has no tuples; token sequences come back as tuples
    return tuple(_word(x) for x in w) if isinstance(w, list) else w


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def tree_from_dict(obj: dict[str, Any], dist: Distance | DistanceFn | None = None) -> BkTree:
    if not isinstance(obj, dict):
        raise ValueError(f"Expected a JSON object, got {type(obj).__name__}")
    if obj.get("format") != FORMAT_VERSION:
        raise ValueError(f"Unsupported tree format: {obj.get('format')!r}")
    if dist is None:
        name = obj.get("metric")
        if name is None:
            raise ValueError("Tree was saved with a custom metric; pass dist= to load it.")
        metric_args = obj.get("metric_args") or {}
        if not isinstance(metric_args, dict):
            raise ValueError(f"metric_args must be an object, got {type(metric_args).__name__}")
        try:
            dist = get_metric(name, **metric_args)
        except TypeError as e:
            raise ValueError(f"Bad metric_args for {name!r}: {e}") from e

    raw = obj.get("nodes", [])
    if not isinstance(raw, list):
        raise ValueError("nodes must be a list")
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict) or "word" not in entry or not isinstance(entry.get("children"), list):
            raise ValueError(f"Node {i} must be an object with 'word' and a 'children' list")
    nodes = [BKNode(word=_word(entry["word"])) for entry in raw]
    seen = {0} if nodes else set()
    for i, (parent, entry) in enumerate(zip(nodes, raw)):
        for edge in entry["children"]:
            if not (isinstance(edge, list) and len(edge) == 2 and all(_is_int(x) for x in edge)):
                raise ValueError(f"Node {i}: edge must be a [distance, index] pair of ints, got {edge!r}")
            d, idx = edge
            if not 0 < idx < len(nodes):
                raise ValueError(f"Child index out of range: {idx}")
            if idx in seen:
                raise ValueError(f"Node {idx} is referenced more than once")
            if d in parent.children:
                raise ValueError(f"Node {i} has more than one child at distance {d}")
            seen.add(idx)
            parent.children[d] = nodes[idx]
    if len(seen) != len(nodes):
        raise ValueError(f"{len(nodes) - len(seen)} node(s) unreachable from the root")
    if "size" in obj and obj["size"] != len(nodes):
        raise ValueError(f"size is {obj['size']!r} but payload holds {len(nodes)} nodes")

    return BkTree.from_root(nodes[0] if nodes else None, dist)


def _json_default(o: Any) -> Any:
    if isinstance(o, np.generic):
        return o.item()
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def save_json(tree: BkTree, path: Path) -> None:
    obj = tree_to_dict(tree)
    path.write_text(json.dumps(obj, default=_json_default), encoding="utf-8")
    logger.debug("saved %d nodes (metric=%s) to %s", obj["size"], obj["metric"], path)


def load_json(path: Path, dist: Distance | DistanceFn | None = None) -> BkTree:
    tree = tree_from_dict(json.loads(path.read_text(encoding="utf-8")), dist)
    logger.debug("loaded %d nodes from %s", len(tree), path)
    return tree
