import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

import orjson

TEXT_SUFFIXES = (".txt", ".md")


def iter_jsonl_texts(path: Path, text_key: str = "text") -> Iterator[tuple[str, str]]:
    """
    Yield (source, text) from a JSONL file holding one model response per line.
    Lines that are not JSON objects with a string `text_key` are skipped.
    """
    with open(path, "rb") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                obj = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                logging.warning(f"{path}:{lineno}: invalid JSON, skipping ({e})")
                continue
            if not isinstance(obj, dict) or not isinstance(obj.get(text_key), str):
                logging.warning(f"{path}:{lineno}: no string '{text_key}' field, skipping")
                continue
            source = str(obj.get("id", f"{path.stem}:{lineno}"))
            yield source, obj[text_key]


def iter_folder_texts(folder: Path) -> Iterator[tuple[str, str]]:
    files = sorted(p for p in folder.iterdir() if p.suffix in TEXT_SUFFIXES)
    logging.info(f"Found {len(files)} response file(s) in {folder}")
    for p in files:
        yield p.stem, p.read_text(encoding="utf-8", errors="replace")


def iter_raw_texts(
    src: Path, text_key: str = "text", stdin: TextIO | None = None
) -> Iterator[tuple[str, str]]:
    """
    Yield (source, raw model text) pairs from a file, a folder of .txt/.md
    files, a JSONL file, or stdin when `src` is "-".
    """
    if str(src) == "-":
        yield "stdin", (stdin or sys.stdin).read()
    elif src.is_dir():
        yield from iter_folder_texts(src)
    elif src.suffix == ".jsonl":
        yield from iter_jsonl_texts(src, text_key)
    else:
        yield src.stem, src.read_text(encoding="utf-8", errors="replace")
