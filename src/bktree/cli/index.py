from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(help="Build and inspect persisted BK-trees.")


def parse_items(lines: list[str], metric: str, lowercase: bool = False) -> list:
    """One item per non-blank line; Hamming items are integers (0x/0b/decimal)."""
    items: list = []
    for lineno, line in enumerate(lines, start=1):
        s = line.strip()
        if not s:
            continue
        if metric == "hamming":
            try:
                items.append(int(s, 0))
            except ValueError:
                raise typer.BadParameter(f"line {lineno}: not an integer: {s!r}")
        else:
            items.append(s.lower() if lowercase else s)
    return items


@app.command("build")
def build_index(
    words: Path = typer.Option(..., exists=True, dir_okay=False, help="Item list (one per line)."),
    output: Path = typer.Option(..., dir_okay=False, help="Where to write the tree JSON."),
    metric: str = typer.Option(None, help="levenshtein or hamming (overrides --config)."),
    hamming_bits: int = typer.Option(None, min=1, help="Fixed word width for the Hamming metric."),
    config: Path = typer.Option(None, exists=True, dir_okay=False, help="YAML TreeConfig."),
    lowercase: bool = typer.Option(False, help="Lowercase string items before inserting."),
    progress: bool = typer.Option(False, help="Show a progress bar."),
):
    """Insert every line of WORDS into a new tree and save it as JSON."""
    from dataclasses import replace

    from tqdm import tqdm

    from bktree.distance import METRICS
    from bktree.persist import save_json
    from bktree.tree import BkTree
    from bktree.utils.config import TreeConfig, load_tree_config
    from bktree.utils.log import get_logger

    try:
        cfg = load_tree_config(config) if config is not None else TreeConfig()
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if metric is not None:
        if metric not in METRICS:
            raise typer.BadParameter(f"--metric must be one of {sorted(METRICS)}, got {metric!r}")
        cfg = replace(cfg, metric=metric)
    if hamming_bits is not None:
        cfg = replace(cfg, hamming_bits=hamming_bits)
    if lowercase:
        cfg = replace(cfg, lowercase=True)

    items = parse_items(words.read_text(encoding="utf-8").splitlines(), cfg.metric, cfg.lowercase)
    tree = BkTree(cfg.make_metric())
    dropped = 0
    for it in tqdm(items, disable=not progress, unit="item"):
        if not tree.insert(it):
            dropped += 1
    get_logger().debug("built tree: size=%d depth=%d dropped=%d", len(tree), tree.depth(), dropped)

    save_json(tree, output)
    typer.echo(f"Stored {len(tree)} items ({dropped} duplicates dropped) in {output}")


@app.command("stats")
def index_stats(
    tree: Path = typer.Option(..., exists=True, dir_okay=False),
):
    """Print size, depth and metric of a saved tree."""
    from bktree.distance import metric_name
    from bktree.persist import load_json

    try:
        bk = load_json(tree)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    typer.echo(f"metric={metric_name(bk.dist)} size={len(bk)} depth={bk.depth()}")
