import json

from typer.testing import CliRunner

from bktree.cli.main import app
from bktree.persist import load_json


runner = CliRunner()

WORDS = ["book", "books", "boo", "boon", "cook", "cake", "cape", "cart"]


def _write_words(tmp_path, lines):
    p = tmp_path / "words.txt"
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


def test_demo():
    result = runner.invoke(app, ["search", "demo"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["book\t2", "boo\t1", "boon\t2"]


def test_build_and_find(tmp_path):
    words = _write_words(tmp_path, WORDS + ["", "book"])
    out = tmp_path / "tree.json"
    result = runner.invoke(app, ["index", "build", "--words", str(words), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert "Stored 8 items (1 duplicates dropped)" in result.output
    assert len(load_json(out)) == 8

    js = tmp_path / "matches.json"
    result = runner.invoke(
        app, ["search", "find", "bo", "--tree", str(out), "--max-dist", "2", "--sorted", "--output-json", str(js)]
    )
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["boo\t1", "book\t2", "boon\t2"]
    assert json.loads(js.read_text(encoding="utf-8"))["matches"] == [["boo", 1], ["book", 2], ["boon", 2]]


def test_build_hamming_with_config(tmp_path):
    words = _write_words(tmp_path, ["0", "0x4", "5", "0b1110", "15"])
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("metric: hamming\nmax_dist: 1\n", encoding="utf-8")
    out = tmp_path / "tree.json"
    result = runner.invoke(
        app, ["index", "build", "--words", str(words), "--output", str(out), "--config", str(cfg)]
    )
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["search", "find", "13", "--tree", str(out), "--config", str(cfg)])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["5\t1", "15\t1"]

    result = runner.invoke(app, ["index", "stats", "--tree", str(out)])
    assert result.exit_code == 0, result.output
    assert "metric=hamming size=5 depth=2" in result.output


def test_bad_hamming_line(tmp_path):
    words = _write_words(tmp_path, ["1", "nope"])
    out = tmp_path / "tree.json"
    result = runner.invoke(
        app, ["index", "build", "--words", str(words), "--output", str(out), "--metric", "hamming"]
    )
    assert result.exit_code != 0
    assert not out.exists()


def test_unknown_metric_option(tmp_path):
    words = _write_words(tmp_path, WORDS)
    out = tmp_path / "tree.json"
    result = runner.invoke(
        app, ["index", "build", "--words", str(words), "--output", str(out), "--metric", "cosine"]
    )
    assert result.exit_code != 0


def test_build_rejects_bad_hamming_bits_in_config(tmp_path):
    words = _write_words(tmp_path, ["1", "2", "3"])
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("metric: hamming\nhamming_bits: -1\n", encoding="utf-8")
    out = tmp_path / "tree.json"
    result = runner.invoke(
        app, ["index", "build", "--words", str(words), "--output", str(out), "--config", str(cfg)]
    )
    assert result.exit_code == 2
    assert not out.exists()


def test_malformed_tree_file_is_bad_parameter(tmp_path):
    tree = tmp_path / "tree.json"
    tree.write_text('{"format": 1, "metric": "levenshtein", "nodes": [{"word": "a"}]}', encoding="utf-8")
    result = runner.invoke(app, ["index", "stats", "--tree", str(tree)])
    assert result.exit_code == 2
    result = runner.invoke(app, ["search", "find", "a", "--tree", str(tree)])
    assert result.exit_code == 2


def test_find_rejects_config_with_other_metric(tmp_path):
    words = _write_words(tmp_path, WORDS)
    out = tmp_path / "tree.json"
    result = runner.invoke(app, ["index", "build", "--words", str(words), "--output", str(out)])
    assert result.exit_code == 0, result.output
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("metric: hamming\n", encoding="utf-8")
    result = runner.invoke(app, ["search", "find", "13", "--tree", str(out), "--config", str(cfg)])
    assert result.exit_code == 2
