import logging

from post_extract.pipeline.grammar import TagGrammar
from post_extract.schemas import Role


def keep_long_enough(pieces: list[str], min_length: int) -> list[str]:
    """Trim pieces and drop the ones too short to be a post (preamble, sign-off)."""
    kept = [p.strip() for p in pieces if len(p.strip()) > min_length]
    if len(kept) < len(pieces):
        logging.debug(f"Discarded {len(pieces) - len(kept)} short piece(s)")
    return kept


def split_on_delimiter(text: str, grammar: TagGrammar) -> list[str]:
    return keep_long_enough(grammar.delimiter.split(text), grammar.min_chunk_length)


def split_on_title_tags(text: str, grammar: TagGrammar) -> list[str]:
    """
    Cut before every TITLE tag, keeping the tag at the head of its piece.
    Text before the first tag is dropped.
    """
    starts = [m.start() for m in grammar.tags[Role.TITLE].finditer(text)]
    pieces = [text[a:b] for a, b in zip(starts, starts[1:] + [len(text)])]
    return keep_long_enough(pieces, grammar.min_chunk_length)


def split(text: str, grammar: TagGrammar) -> list[str]:
    """
    Divide normalized text into candidate record chunks, in source order.

    The delimiter is authoritative; TITLE-tag splitting only runs when it
    produced at most one chunk, and only replaces that result if it finds more.
    """
    chunks = split_on_delimiter(text, grammar)
    if len(chunks) > 1:
        return chunks
    fallback = split_on_title_tags(text, grammar)
    if len(fallback) > len(chunks):
        logging.debug(
            f"Delimiter gave {len(chunks)} chunk(s); split on TITLE tags into {len(fallback)}"
        )
        return fallback
    return chunks
