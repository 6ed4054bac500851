import logging

from post_extract.pipeline.fields import extract_with_source, isolate_body_with_source
from post_extract.pipeline.grammar import TagGrammar
from post_extract.schemas import SHORT_ROLES, FieldSource, ParsedRecord, Record, Role


def assemble_detailed(chunk: str, grammar: TagGrammar, index: int = 0) -> ParsedRecord:
    """
    Build one record from a chunk, substituting defaults for missing fields.
    A post without a recoverable body keeps the whole chunk as its body.
    """
    values: dict[Role, str] = {}
    sources: dict[Role, FieldSource] = {}
    for role in SHORT_ROLES:
        value, source = extract_with_source(chunk, role, grammar)
        values[role] = value or grammar.config.default_for(role)
        sources[role] = source

    body, source = isolate_body_with_source(chunk, grammar)
    values[Role.BODY] = body or chunk.strip()
    sources[Role.BODY] = source

    defaulted = [role.value for role, source in sources.items() if source == "default"]
    if defaulted:
        logging.debug(f"Chunk {index}: defaults used for {defaulted}")

    record = Record(**{role.value: value for role, value in values.items()})
    return ParsedRecord(record=record, index=index, sources=sources)


def assemble(chunk: str, grammar: TagGrammar) -> Record:
    return assemble_detailed(chunk, grammar).record
