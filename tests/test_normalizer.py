import pytest

from post_extract.pipeline.normalizer import (
    coerce_text,
    normalize,
    strip_code_fences,
    strip_emphasis,
    strip_math,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("```\n$$$TITLE$$$ A\n```", "$$$TITLE$$$ A\n"),
        ("```markdown\n$$$TITLE$$$ A\n```", "$$$TITLE$$$ A\n"),
        ("```JSON\nx\n```\n", "x\n"),
        ("no fences here", "no fences here"),
        ("```c++\nx\n```", "x\n"),
        ("```---POST_DIVIDER---\nx", "---POST_DIVIDER---\nx"),
    ],
)
def test_strip_code_fences(raw, expected):
    assert strip_code_fences(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$$$ANGLE$$$ $B$", "$$$ANGLE$$$ B"),
        ("$$$ANGLE$$$ $$B$$", "$$$ANGLE$$$ B"),
        ("energy $E = mc^2$ rules", "energy E = mc^2 rules"),
        ("\\(x\\) and \\[y\\]", "x and y"),
        ("\\begin{equation}a+b\\end{equation}", "a+b"),
        ("it costs $5 and $10", "it costs $5 and $10"),
        ("$$$TITLE$$$ A\n$$$CONTENT$$$ B", "$$$TITLE$$$ A\n$$$CONTENT$$$ B"),
    ],
)
def test_strip_math(raw, expected):
    assert strip_math(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("**$$$TITLE$$$** A", "$$$TITLE$$$ A"),
        ("**bold** text", "bold text"),
        ("*$$$TITLE$$$* A", "$$$TITLE$$$ A"),
        ("an *emphasised phrase* here", "an emphasised phrase here"),
        ("* bullet item", "* bullet item"),
        ("2*3*4", "2*3*4"),
        ("***\n---", "***\n---"),
    ],
)
def test_strip_emphasis(raw, expected):
    assert strip_emphasis(raw) == expected


def test_single_emphasis_can_be_kept():
    assert strip_emphasis("an *x* here", single=False) == "an *x* here"
    assert strip_emphasis("**x**", single=False) == "x"


def test_coerce_text():
    assert coerce_text(None) == ""
    assert coerce_text("标题".encode("utf-8")) == "标题"
    assert coerce_text(b"\xff ok") == "\ufffd ok"


def test_normalize_is_noop_without_noise():
    text = "$$$TITLE$$$ A\n$$$CONTENT$$$ plain body [1]"
    assert normalize(text) == text


def test_normalize_line_endings():
    assert normalize("a\r\nb\rc") == "a\nb\nc"


def test_normalize_combined():
    raw = "```markdown\n**$$$TITLE$$$** $A$\n$$$CONTENT$$$ \\begin{aligned}x\\end{aligned}\n```"
    assert normalize(raw) == "$$$TITLE$$$ A\n$$$CONTENT$$$ x\n"
