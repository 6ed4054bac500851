import re

from post_extract.schemas import Role

DEFAULT_DELIMITER = "---POST_DIVIDER---"

# Observed production values ranged from 10 to 50.
DEFAULT_MIN_CHUNK_LENGTH = 20

DEFAULT_TAG_NAMES: dict[Role, str] = {
    Role.TITLE: "TITLE",
    Role.ANGLE: "ANGLE",
    Role.VISUAL_KEYWORD: "IMAGE_KEYWORD",
    Role.BODY: "CONTENT",
}

# Bilingual (English, Chinese) labels accepted as "Label: value" when the tag is missing.
DEFAULT_ALIASES: dict[Role, tuple[str, ...]] = {
    Role.TITLE: ("Title", "Headline", "标题", "题目"),
    Role.ANGLE: ("Angle", "Category", "角度", "切入角度", "分类"),
    Role.VISUAL_KEYWORD: (
        "Image Keyword",
        "Visual Keyword",
        "Image",
        "图片关键词",
        "配图关键词",
        "视觉关键词",
        "配图",
    ),
    Role.BODY: ("Content", "Body", "Article", "正文", "内容"),
}

DEFAULT_VALUES: dict[Role, str] = {
    Role.TITLE: "爆款深度内容",
    Role.ANGLE: "实时观察",
    Role.VISUAL_KEYWORD: "news",
}

# --- Sigils ---
TAG_NAME_RE = re.compile(r"^\w+$")
# Any $$$NAME$$$ tag, known role or not.
ANY_TAG_RE = re.compile(r"\$\$\$[ \t]*\w+[ \t]*\$\$\$")

# --- Noise ---
# Opening fences may carry a language word: ```json, ```markdown, ```c++
CODE_FENCE_RE = re.compile(r"```[ \t]*[\w+#.]*[ \t]*\n?")
# `$` runs of three belong to tag sigils and are never math.
DISPLAY_MATH_RE = re.compile(r"(?<!\$)\$\$(?!\$)(.+?)(?<!\$)\$\$(?!\$)", re.S)
# Pandoc's rule: no blank after the opening `$`, none before the closing one,
# and no digit right after it ("$5 and $10" is not math).
INLINE_MATH_RE = re.compile(r"(?<!\$)\$(?=[^\s$])([^$\n]*?[^\s$])\$(?![$\d])")
LATEX_PAREN_RE = re.compile(r"\\[()\[\]]")
MATH_ENV_RE = re.compile(r"\\(?:begin|end)[ \t]*\{[^{}\n]*\}")
BOLD_RE = re.compile(r"(?<!\*)\*\*(?!\*)")
# *word* or *a phrase*; bullets ("* item") and 2*3*4 are left alone.
SINGLE_EMPHASIS_RE = re.compile(r"(?<![*\w])\*(?=[^\s*])([^*\n]*?[^\s*])\*(?![*\w])")

# --- Splitting ---
RULE_LINE = r"[ \t]*[-*]{3,}[ \t]*"
RULE_LINE_RE = re.compile(rf"^{RULE_LINE}$")

# --- Field values ---
# Separators a model leaves between a label and its value.
LEADING_SEPARATOR_RE = re.compile(r"^[\s:：;；,，、]+")
# A whole value wrapped in one matching run of asterisks: *A*, **A**, ***A***
EMPHASIS_WRAP_RE = re.compile(r"^(\*{1,3})(?=[^\s*])([^*]*[^\s*])\1$")
BRACKET_PAIRS: tuple[tuple[str, str], ...] = (
    ("[", "]"),
    ("【", "】"),
    ("(", ")"),
    ("（", "）"),
    ("「", "」"),
    ("『", "』"),
    ("《", "》"),
)
# Optional list bullet, heading hashes or quote marks before an alias label.
LABEL_PREFIX = r"^[ \t]*(?:[#>*+\-]+[ \t]*)?[\[【]?"
LABEL_SUFFIX = r"[\]】]?[ \t*_]*[:：]"

# --- References ---
CITATION_RE = re.compile(r"\[(\d+)\]")
REFERENCE_LINE_RE = re.compile(r"^[ \t]*[\[【](\d+)[\]】][ \t]*(.*?)[ \t]*$")
URL_RE = re.compile(r"https?://[^\s<>\"'）)\]】]+")
URL_TRAILING_PUNCT_RE = re.compile(r"[，。！；、,.;!?？:：]+$")
REFERENCE_HEADING_RE = re.compile(
    r"^[ \t#>*]*[\[【]?(?:参考来源|参考资料|参考文献|信息来源|来源|references?|sources?)[\]】]?[ \t*]*[:：]?[ \t]*$",
    re.IGNORECASE,
)
REFERENCE_TITLE_STRIP = " \t-–—:：|·"
