"""
Field extraction for one chunk.

Each strategy is a plain function ``(chunk, role, grammar) -> str | None``;
they are tried left to right and the first non-empty value wins.
"""

from typing import Callable, Optional

from post_extract.patterns import (
    ANY_TAG_RE,
    BRACKET_PAIRS,
    EMPHASIS_WRAP_RE,
    LEADING_SEPARATOR_RE,
    RULE_LINE_RE,
)
from post_extract.pipeline.grammar import TagGrammar
from post_extract.pipeline.normalizer import strip_emphasis
from post_extract.schemas import FieldSource, Role

Strategy = Callable[[str, Role, TagGrammar], Optional[str]]


def strip_brackets(value: str) -> str:
    """
    Remove one layer of brackets wrapping the whole value.

    >>> strip_brackets("【标题】")
    '标题'
    >>> strip_brackets("[1] and [2]")
    '[1] and [2]'
    """
    for opening, closing in BRACKET_PAIRS:
        if value.startswith(opening) and value.endswith(closing) and len(value) >= 2:
            inner = value[1:-1]
            if opening not in inner and closing not in inner:
                return inner.strip()
    return value


def _trim_rule_lines(value: str) -> str:
    lines = value.split("\n")
    while lines and (not lines[0].strip() or RULE_LINE_RE.match(lines[0])):
        lines = lines[1:]
    while lines and (not lines[-1].strip() or RULE_LINE_RE.match(lines[-1])):
        lines = lines[:-1]
    return "\n".join(lines)


def clean_value(value: str) -> str:
    """
    Trim label separators, decorative rule lines and one wrapping layer of
    emphasis or brackets. Leading bullets, signs and dots are content.

    >>> clean_value("：**【-5% 回调】**")
    '-5% 回调'
    >>> clean_value(" .NET 9 ")
    '.NET 9'
    """
    value = _trim_rule_lines(LEADING_SEPARATOR_RE.sub("", value)).strip()
    value = EMPHASIS_WRAP_RE.sub(r"\2", value)
    value = strip_brackets(value)
    value = LEADING_SEPARATOR_RE.sub("", value)
    return EMPHASIS_WRAP_RE.sub(r"\2", value).strip()


def tagged_value(chunk: str, role: Role, grammar: TagGrammar) -> Optional[str]:
    """
    Text from the role's tag to the next tag of any name (or the end of the chunk).
    A tag emitted twice leaves an empty first value; later occurrences are tried.
    """
    for match in grammar.tags[role].finditer(chunk):
        start = match.end()
        next_tag = ANY_TAG_RE.search(chunk, start)
        end = next_tag.start() if next_tag else len(chunk)
        value = clean_value(chunk[start:end])
        if value:
            return value
    return None


def alias_value(chunk: str, role: Role, grammar: TagGrammar) -> Optional[str]:
    """Remainder of the first line that starts with one of the role's labels."""
    for match in grammar.aliases[role].finditer(chunk):
        value = clean_value(match.group(1))
        if value:
            return value
    return None


STRATEGIES: tuple[tuple[FieldSource, Strategy], ...] = (
    ("tag", tagged_value),
    ("alias", alias_value),
)


def extract_with_source(
    chunk: str, role: Role, grammar: TagGrammar
) -> tuple[Optional[str], FieldSource]:
    for source, strategy in STRATEGIES:
        value = strategy(chunk, role, grammar)
        if value:
            return value, source
    return None, "default"


def extract(chunk: str, role: Role, grammar: TagGrammar) -> Optional[str]:
    """Value of `role` in `chunk`, or None when no strategy finds one."""
    return extract_with_source(chunk, role, grammar)[0]


# --- Body ---


def body_alias_value(chunk: str, grammar: TagGrammar) -> Optional[str]:
    """
    Like `alias_value`, but a body runs past its first line: it ends at the
    next labelled line or tag.
    """
    for match in grammar.aliases[Role.BODY].finditer(chunk):
        start = match.start(1)
        ends = [len(chunk)]
        if next_label := grammar.any_alias.search(chunk, match.end()):
            ends.append(next_label.start())
        if next_tag := ANY_TAG_RE.search(chunk, match.end()):
            ends.append(next_tag.start())
        value = clean_value(chunk[start : min(ends)])
        if value:
            return value
    return None


def _drop_edge_rules(lines: list[str], grammar: TagGrammar) -> list[str]:
    def is_residue(line: str) -> bool:
        s = line.strip()
        return (
            not s
            or bool(RULE_LINE_RE.match(s))
            or s.lower() == grammar.config.delimiter.lower()
        )

    while lines and is_residue(lines[0]):
        lines = lines[1:]
    while lines and is_residue(lines[-1]):
        lines = lines[:-1]
    return lines


def heal_body(body: str, grammar: TagGrammar) -> str:
    """
    Delete tag tokens and half-sigil fragments that leaked into a body, line by
    line, and strip emphasis. Lines holding nothing but leaked tags are dropped.
    Idempotent: heal_body(heal_body(x)) == heal_body(x).
    """
    single = grammar.config.strip_single_emphasis
    healed: list[str] = []
    for line in body.split("\n"):
        cleaned = line
        while True:
            cleaned, n = grammar.leaked_tag.subn("", cleaned)
            if n == 0:
                break
        if cleaned != line:
            if not cleaned.strip():
                continue
            cleaned = cleaned.strip()
        healed.append(strip_emphasis(cleaned, single=single).rstrip())
    return "\n".join(_drop_edge_rules(healed, grammar)).strip()


BODY_STRATEGIES: tuple[tuple[FieldSource, Callable[[str, TagGrammar], Optional[str]]], ...] = (
    ("tag", lambda chunk, grammar: tagged_value(chunk, Role.BODY, grammar)),
    ("alias", body_alias_value),
)


def isolate_body_with_source(
    chunk: str, grammar: TagGrammar
) -> tuple[Optional[str], FieldSource]:
    for source, strategy in BODY_STRATEGIES:
        value = strategy(chunk, grammar)
        if value and (healed := heal_body(value, grammar)):
            return healed, source
    return None, "default"


def isolate_body(chunk: str, grammar: TagGrammar) -> Optional[str]:
    """Long-form BODY value, self-healed, or None."""
    return isolate_body_with_source(chunk, grammar)[0]
