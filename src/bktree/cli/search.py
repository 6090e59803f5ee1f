from __future__ import annotations

import json
from pathlib import Path

import typer

app = typer.Typer(help="Query BK-trees.")

DEMO_WORDS = ["book", "books", "boo", "boon", "cook", "cake", "cape", "cart"]


def _print_matches(matches: list[tuple]) -> None:
    for word, d in matches:
        typer.echo(f"{word}\t{d}")


@app.command("find")
def search_find(
    query: str = typer.Argument(..., help="Item to look up."),
    tree: Path = typer.Option(..., exists=True, dir_okay=False),
    max_dist: int = typer.Option(None, help="Maximum distance, inclusive (default: config or 2)."),
    config: Path = typer.Option(None, exists=True, dir_okay=False, help="YAML TreeConfig."),
    sort: bool = typer.Option(False, "--sorted", help="Sort matches by distance."),
    output_json: Path = typer.Option(None, dir_okay=False),
):
    """Print every stored item within MAX_DIST of QUERY as item<TAB>distance."""
    from bktree.distance import metric_name
    from bktree.persist import load_json
    from bktree.utils.config import TreeConfig, load_tree_config

    try:
        cfg = load_tree_config(config) if config is not None else TreeConfig()
        bk = load_json(tree)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if config is not None and cfg.metric != metric_name(bk.dist):
        raise typer.BadParameter(
            f"--config asks for metric {cfg.metric!r} but {tree} was built with {metric_name(bk.dist)!r}"
        )
    if max_dist is None:
        max_dist = cfg.max_dist

    q: object = query.lower() if cfg.lowercase else query
    if metric_name(bk.dist) == "hamming":
        try:
            q = int(query, 0)
        except ValueError:
            raise typer.BadParameter(f"Hamming trees need an integer query, got {query!r}")

    matches = bk.closest(q, max_dist) if sort else bk.find(q, max_dist)
    _print_matches(matches)
    if output_json is not None:
        result = {"query": query, "max_dist": max_dist, "matches": [[w, d] for w, d in matches]}
        output_json.write_text(json.dumps(result, indent=2), encoding="utf-8")


@app.command("demo")
def search_demo():
    """Build a small word tree and look up "bo" within distance 2."""
    from bktree.distance import LevenshteinDistance
    from bktree.tree import BkTree

    bk = BkTree(LevenshteinDistance()).insert_all(DEMO_WORDS)
    _print_matches(bk.find("bo", 2))
