from post_extract.config import ParserConfig, load_config
from post_extract.pipeline.pipeline import (
    RecordExtractor,
    parse,
    parse_detailed,
    parse_first,
)
from post_extract.references import (
    cited_indices,
    dangling_citations,
    extract_references,
)
from post_extract.schemas import ParsedRecord, Record, Reference, Role

__all__ = [
    "ParserConfig",
    "ParsedRecord",
    "Record",
    "RecordExtractor",
    "Reference",
    "Role",
    "cited_indices",
    "dangling_citations",
    "extract_references",
    "load_config",
    "parse",
    "parse_detailed",
    "parse_first",
]
