import re
from dataclasses import dataclass
from re import Pattern

from post_extract.config import ParserConfig
from post_extract.patterns import LABEL_PREFIX, LABEL_SUFFIX, RULE_LINE
from post_extract.schemas import Role


def tag_pattern(name: str) -> str:
    return rf"\$\$\$[ \t]*{re.escape(name)}[ \t]*\$\$\$"


def label_alternation(labels: list[str]) -> str:
    # Longest first so "Image Keyword" wins over "Image".
    ordered = sorted(set(labels), key=lambda s: (-len(s), s))
    return "|".join(re.escape(label) for label in ordered)


def role_labels(config: ParserConfig, role: Role) -> list[str]:
    """Alias labels of a role, including the bare tag name and its spaced form."""
    name = config.tag_name(role)
    return [*config.aliases.get(role, ()), name, name.replace("_", " ")]


@dataclass(frozen=True)
class TagGrammar:
    """Compiled regexes for one ParserConfig."""

    config: ParserConfig
    tags: dict[Role, Pattern[str]]
    aliases: dict[Role, Pattern[str]]
    any_alias: Pattern[str]
    delimiter: Pattern[str]
    leaked_tag: Pattern[str]

    @classmethod
    def from_config(cls, config: ParserConfig) -> "TagGrammar":
        tags = {
            role: re.compile(tag_pattern(config.tag_name(role)), re.IGNORECASE)
            for role in Role
        }
        aliases = {
            role: re.compile(
                LABEL_PREFIX
                + rf"(?:{label_alternation(role_labels(config, role))})"
                + LABEL_SUFFIX
                + r"[ \t]*(.*)$",
                re.IGNORECASE | re.MULTILINE,
            )
            for role in Role
        }
        all_labels = [label for role in Role for label in role_labels(config, role)]
        any_alias = re.compile(
            LABEL_PREFIX + rf"(?:{label_alternation(all_labels)})" + LABEL_SUFFIX,
            re.IGNORECASE | re.MULTILINE,
        )
        # The literal token, absorbing a decorative rule line just before or after it.
        delimiter = re.compile(
            rf"(?:^{RULE_LINE}\n\s*)?{re.escape(config.delimiter)}(?:[ \t]*\n{RULE_LINE}$)?",
            re.IGNORECASE | re.MULTILINE,
        )
        names = label_alternation([config.tag_name(role) for role in Role])
        leaked_tag = re.compile(
            r"|".join(
                (
                    r"\$\$\$[ \t]*\w*[ \t]*\$\$\$",
                    rf"\${{2,}}[ \t]*(?:{names})\b[ \t]*\$*",
                    rf"\b(?:{names})[ \t]*\${{2,}}",
                )
            ),
            re.IGNORECASE,
        )
        return cls(
            config=config,
            tags=tags,
            aliases=aliases,
            any_alias=any_alias,
            delimiter=delimiter,
            leaked_tag=leaked_tag,
        )

    @property
    def min_chunk_length(self) -> int:
        return self.config.min_chunk_length
