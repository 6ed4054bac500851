from collections.abc import Iterable
from pathlib import Path

import orjson
import polars as pl

from post_extract.schemas import Role

ROW_FIELDS = [
    "source",
    "index",
    *(role.value for role in Role),
    "recognition",
    *(f"{role.value}_source" for role in Role),
]


def export_records(rows: Iterable[dict], out: Path) -> int:
    """
    Write record rows (see `ParsedRecord.to_row`) to CSV via Polars when `out`
    ends in .csv, otherwise to JSON Lines. Returns the number of rows written.

    >>> from pathlib import Path
    >>> out = Path("test-records.jsonl")
    >>> export_records([{"source": "a", "index": 0, "title": "T"}], out)
    1
    >>> out.unlink()
    """
    out = Path(out)
    records = [{k: row.get(k) for k in ROW_FIELDS} for row in rows]
    if out.suffix == ".csv":
        # Always pass the schema so an empty export still has a header.
        schema = {k: (pl.Int64 if k == "index" else pl.Utf8) for k in ROW_FIELDS}
        pl.DataFrame(records, schema=schema).write_csv(out)
    else:
        with open(out, "wb") as f:
            for rec in records:
                f.write(orjson.dumps(rec, option=orjson.OPT_APPEND_NEWLINE))
    return len(records)
