import logging
from functools import lru_cache
from typing import Optional, Union

from post_extract.config import ParserConfig
from post_extract.pipeline.assembler import assemble_detailed
from post_extract.pipeline.grammar import TagGrammar
from post_extract.pipeline.normalizer import normalize
from post_extract.pipeline.splitter import split
from post_extract.schemas import ParsedRecord, Record

RawText = Union[str, bytes, None]


class RecordExtractor:
    """
    Turns one raw model response into an ordered list of records.

    Stages run strictly in order: normalize, split, then extract and assemble
    per chunk. Holds only compiled regexes, so one instance can be shared.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.grammar = TagGrammar.from_config(self.config)

    def parse_detailed(self, raw: RawText) -> list[ParsedRecord]:
        text = normalize(raw, strip_single_emphasis=self.config.strip_single_emphasis)
        chunks = split(text, self.grammar)
        records = [
            assemble_detailed(chunk, self.grammar, index=i)
            for i, chunk in enumerate(chunks)
        ]
        if not records:
            logging.info("No records recovered from model output")
        return records

    def __call__(self, raw: RawText) -> list[Record]:
        return [parsed.record for parsed in self.parse_detailed(raw)]


@lru_cache(maxsize=1)
def default_extractor() -> RecordExtractor:
    return RecordExtractor()


def get_extractor(config: Optional[ParserConfig] = None) -> RecordExtractor:
    return default_extractor() if config is None else RecordExtractor(config)


def parse(raw: RawText, config: Optional[ParserConfig] = None) -> list[Record]:
    """Parse a raw model response into records. Never raises; [] on total failure."""
    return get_extractor(config)(raw)


def parse_detailed(
    raw: RawText, config: Optional[ParserConfig] = None
) -> list[ParsedRecord]:
    return get_extractor(config).parse_detailed(raw)


def parse_first(raw: RawText, config: Optional[ParserConfig] = None) -> Optional[Record]:
    """
    First record of a response, for re-requests of a single post (rewrites).
    None when nothing could be recovered, so the caller keeps the old post.
    """
    records = parse(raw, config)
    return records[0] if records else None
