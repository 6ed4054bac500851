from typing import Union

from post_extract.patterns import (
    BOLD_RE,
    CODE_FENCE_RE,
    DISPLAY_MATH_RE,
    INLINE_MATH_RE,
    LATEX_PAREN_RE,
    MATH_ENV_RE,
    SINGLE_EMPHASIS_RE,
)


def coerce_text(raw: Union[str, bytes, None]) -> str:
    """Accept whatever the model client handed over; never fail."""
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)


def strip_code_fences(text: str) -> str:
    """
    >>> strip_code_fences("```markdown\\nhello\\n```")
    'hello\\n'
    """
    return CODE_FENCE_RE.sub("", text)


def strip_math(text: str) -> str:
    """
    Remove paired math delimiters and environment markers, keeping the contents.
    `$$$` tag sigils are left intact.

    >>> strip_math("$$$ANGLE$$$ $x^2$")
    '$$$ANGLE$$$ x^2'
    >>> strip_math("costs $5 and $10")
    'costs $5 and $10'
    """
    text = DISPLAY_MATH_RE.sub(r"\1", text)
    text = INLINE_MATH_RE.sub(r"\1", text)
    text = MATH_ENV_RE.sub("", text)
    return LATEX_PAREN_RE.sub("", text)


def strip_emphasis(text: str, single: bool = True) -> str:
    """
    Remove standalone `**` and, if `single`, `*phrase*` emphasis.
    Rule lines (`***`) and bullets (`* item`) survive.

    >>> strip_emphasis("**bold** and *it*")
    'bold and it'
    >>> strip_emphasis("* item\\n***")
    '* item\\n***'
    """
    text = BOLD_RE.sub("", text)
    if single:
        text = SINGLE_EMPHASIS_RE.sub(r"\1", text)
    return text


def normalize(
    raw: Union[str, bytes, None], strip_single_emphasis: bool = True
) -> str:
    """Strip formatting artifacts a model wraps around otherwise valid content."""
    text = coerce_text(raw).replace("\r\n", "\n").replace("\r", "\n")
    text = strip_code_fences(text)
    text = strip_math(text)
    return strip_emphasis(text, single=strip_single_emphasis)
