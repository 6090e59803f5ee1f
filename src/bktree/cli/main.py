from __future__ import annotations

import typer

from bktree.cli import index as index_cmd
from bktree.cli import search as search_cmd
from bktree.utils.log import setup_logging

app = typer.Typer(help="BK-tree fuzzy matching CLI.")

app.add_typer(index_cmd.app, name="index")
app.add_typer(search_cmd.app, name="search")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")):
    setup_logging(verbose)
