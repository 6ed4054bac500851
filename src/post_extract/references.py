"""
Numbered source lists and `[n]` citation markers inside post bodies.

Posts are asked to end with a list such as::

    【参考来源】
    [1] 标题 - https://example.org/a
    [2] https://example.org/b

These helpers recover that list and the markers used in the prose.
"""

from typing import Optional

from post_extract.patterns import (
    CITATION_RE,
    REFERENCE_HEADING_RE,
    REFERENCE_LINE_RE,
    REFERENCE_TITLE_STRIP,
    URL_RE,
    URL_TRAILING_PUNCT_RE,
)
from post_extract.schemas import Reference


def clean_url(url: str) -> str:
    """
    >>> clean_url("https://x.test/1。")
    'https://x.test/1'
    """
    return URL_TRAILING_PUNCT_RE.sub("", url)


def _parse_reference_line(line: str, in_section: bool) -> Optional[Reference]:
    m = REFERENCE_LINE_RE.match(line)
    if not m:
        return None
    rest = m.group(2)
    url_match = URL_RE.search(rest)
    if not url_match and not in_section:
        return None
    url = clean_url(url_match.group(0)) if url_match else None
    title = rest
    if url_match:
        title = rest[: url_match.start()] + rest[url_match.end() :]
    return Reference(index=int(m.group(1)), title=title.strip(REFERENCE_TITLE_STRIP), url=url)


def _scan(body: str) -> tuple[list[Reference], list[str]]:
    """Split body lines into reference entries and prose lines."""
    references: list[Reference] = []
    prose: list[str] = []
    in_section = False
    for line in body.splitlines():
        if REFERENCE_HEADING_RE.match(line):
            in_section = True
            continue
        ref = _parse_reference_line(line, in_section)
        if ref is None:
            prose.append(line)
        else:
            references.append(ref)
    return references, prose


def extract_references(body: str) -> list[Reference]:
    return _scan(body or "")[0]


def cited_indices(body: str) -> list[int]:
    """Distinct `[n]` markers used in the prose, in order of first use."""
    _, prose = _scan(body or "")
    seen: dict[int, None] = {}
    for line in prose:
        for m in CITATION_RE.finditer(line):
            seen.setdefault(int(m.group(1)), None)
    return list(seen)


def dangling_citations(body: str) -> list[int]:
    """Markers that point at no entry of the source list."""
    known = {ref.index for ref in extract_references(body)}
    return [i for i in cited_indices(body) if i not in known]
