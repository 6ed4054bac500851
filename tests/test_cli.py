import orjson
from typer.testing import CliRunner

from post_extract.cli import app

runner = CliRunner()


def test_parse_command(tmp_path, well_formed):
    src = tmp_path / "response.txt"
    src.write_text(well_formed, encoding="utf-8")
    out = tmp_path / "posts.jsonl"
    result = runner.invoke(app, ["parse", str(src), str(out)])
    assert result.exit_code == 0, result.output
    assert "Wrote 4 post(s)" in result.output
    rows = [orjson.loads(line) for line in out.read_bytes().splitlines()]
    assert [row["source"] for row in rows] == ["response"] * 4


def test_parse_command_min_length(tmp_path):
    src = tmp_path / "response.txt"
    src.write_text("$$$TITLE$$$ A\n$$$CONTENT$$$ Bye", encoding="utf-8")
    out = tmp_path / "posts.csv"
    result = runner.invoke(app, ["parse", str(src), str(out), "--min-length", "50"])
    assert result.exit_code == 0, result.output
    assert "Wrote 0 post(s)" in result.output


def test_parse_command_bad_config(tmp_path):
    src = tmp_path / "response.txt"
    src.write_text("x", encoding="utf-8")
    cfg = tmp_path / "parser.yaml"
    cfg.write_text("min_chunk_length: -3\n", encoding="utf-8")
    result = runner.invoke(
        app, ["parse", str(src), str(tmp_path / "o.jsonl"), "--config", str(cfg)]
    )
    assert result.exit_code == 2


def test_parse_command_missing_config(tmp_path):
    src = tmp_path / "response.txt"
    src.write_text("x", encoding="utf-8")
    result = runner.invoke(
        app,
        ["parse", str(src), str(tmp_path / "o.jsonl"), "-c", str(tmp_path / "no.yaml")],
    )
    assert result.exit_code == 2


def test_report_command_stdin():
    raw = "$$$TITLE$$$ A\n$$$ANGLE$$$ B\n$$$IMAGE_KEYWORD$$$ c\n$$$CONTENT$$$ body [1]\n[1] Src https://x.test/1\n---POST_DIVIDER---\n$$$TITLE$$$ D\n$$$CONTENT$$$ Bye"
    result = runner.invoke(app, ["report", "-"], input=raw)
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[0].split("\t") == [
        "source",
        "posts",
        "full",
        "partial",
        "defaulted",
        "references",
    ]
    assert lines[1].split("\t") == ["stdin", "2", "1", "1", "2", "1"]
