import pytest

from post_extract.config import ParserConfig
from post_extract.pipeline.grammar import TagGrammar
from post_extract.pipeline.pipeline import RecordExtractor

POSTS = [
    ("春季新剧盘点", "剧评", "tv drama", "今年春天有三部剧值得一看[1]。\n第二段内容。"),
    ("手机内存清理", "实用技巧", "smartphone", "先清理缓存[1]，再卸载不用的应用[2]。"),
    ("反诈提醒", "安全", "phone scam", "接到陌生电话要提高警惕，不要轻易转账。"),
    ("AI 新进展", "科技", "robot", "新一代模型发布，性能大幅提升[1]。"),
]


def tagged_post(title: str, angle: str, keyword: str, body: str) -> str:
    return (
        f"$$$TITLE$$$ {title}\n"
        f"$$$ANGLE$$$ {angle}\n"
        f"$$$IMAGE_KEYWORD$$$ {keyword}\n"
        f"$$$CONTENT$$$\n{body}\n"
    )


@pytest.fixture(scope="session")
def config():
    return ParserConfig()


@pytest.fixture(scope="session")
def grammar(config):
    return TagGrammar.from_config(config)


@pytest.fixture(scope="session")
def extractor(config):
    return RecordExtractor(config)


@pytest.fixture
def posts():
    return POSTS


@pytest.fixture
def well_formed():
    """Four tagged posts separated by the delimiter, with chatter around them."""
    body = "\n---POST_DIVIDER---\n".join(tagged_post(*p) for p in POSTS)
    return "好的，以下是为您生成的4篇推文：\n\n" + body + "\n---POST_DIVIDER---\n希望对你有帮助！"


@pytest.fixture
def undelimited():
    """The same four posts with no delimiter between them."""
    return "\n".join(tagged_post(*p) for p in POSTS)
