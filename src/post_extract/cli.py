"""
post-extract: CLI for recovering posts from raw model output.

Usage:
  post-extract parse [OPTIONS] SRC OUT
  post-extract report [OPTIONS] SRC

Examples:
  post-extract parse response.txt posts.jsonl
  post-extract parse responses/ posts.csv --min-length 30 -v
  post-extract parse responses.jsonl posts.jsonl --config parser.yaml -vv
  cat response.txt | post-extract report -
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from post_extract.config import ParserConfig, load_config
from post_extract.io.export import export_records
from post_extract.io.loader import iter_raw_texts
from post_extract.pipeline.pipeline import RecordExtractor
from post_extract.references import extract_references

app = typer.Typer(help=__doc__, no_args_is_help=True)


def setup_logging(verbose: int):
    """Set up logging based on verbosity level."""
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:  # verbose >= 2
        level = logging.DEBUG

    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def build_config(config: Optional[Path], min_length: Optional[int]) -> ParserConfig:
    try:
        return load_config(config, min_chunk_length=min_length)
    except FileNotFoundError as e:
        raise typer.BadParameter(f"config file not found: {e.filename}")
    except (ValidationError, ValueError) as e:
        raise typer.BadParameter(f"invalid parser config: {e}")


@app.command("parse", help="Parse raw model output into posts and write JSONL or CSV.")
def parse(
    src: Path = typer.Argument(
        ..., help="Response file, folder of .txt/.md files, JSONL file, or - for stdin"
    ),
    out: Path = typer.Argument(..., help="Output file (.csv or .jsonl)"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML parser configuration"
    ),
    min_length: Optional[int] = typer.Option(
        None, "--min-length", "-m", help="Override the minimum chunk length"
    ),
    text_key: str = typer.Option("text", help="Field holding the response in JSONL input"),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    ),
) -> None:
    """Parse every response in SRC and export one row per recovered post."""
    setup_logging(verbose)
    extractor = RecordExtractor(build_config(config, min_length))

    rows = []
    for source, raw in iter_raw_texts(src, text_key=text_key):
        parsed = extractor.parse_detailed(raw)
        logging.info(f"{source}: {len(parsed)} post(s)")
        rows.extend(p.to_row(source) for p in parsed)

    n = export_records(rows, out)
    typer.echo(f"Wrote {n} post(s) to {out}")


@app.command("report", help="Summarize how well each response was recovered.")
def report(
    src: Path = typer.Argument(
        ..., help="Response file, folder of .txt/.md files, JSONL file, or - for stdin"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML parser configuration"
    ),
    min_length: Optional[int] = typer.Option(
        None, "--min-length", "-m", help="Override the minimum chunk length"
    ),
    text_key: str = typer.Option("text", help="Field holding the response in JSONL input"),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    ),
) -> None:
    """Print per-source counts of full/partial posts, defaulted fields and references."""
    setup_logging(verbose)
    extractor = RecordExtractor(build_config(config, min_length))

    typer.echo("source\tposts\tfull\tpartial\tdefaulted\treferences")
    for source, raw in iter_raw_texts(src, text_key=text_key):
        parsed = extractor.parse_detailed(raw)
        full = sum(1 for p in parsed if p.recognition == "full")
        defaulted = sum(len(p.defaulted) for p in parsed)
        references = sum(len(extract_references(p.record.body)) for p in parsed)
        typer.echo(
            f"{source}\t{len(parsed)}\t{full}\t{len(parsed) - full}\t{defaulted}\t{references}"
        )


if __name__ == "__main__":
    app()
