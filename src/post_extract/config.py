import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from post_extract.patterns import (
    DEFAULT_ALIASES,
    DEFAULT_DELIMITER,
    DEFAULT_MIN_CHUNK_LENGTH,
    DEFAULT_TAG_NAMES,
    DEFAULT_VALUES,
    TAG_NAME_RE,
)
from post_extract.schemas import SHORT_ROLES, Role


class ParserConfig(BaseModel):
    """
    Tuning constants of the record parser.

    The minimum chunk length and the alias label sets differed between
    deployments, so both are configuration rather than constants.
    Partial mappings are merged over the built-in defaults.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = DEFAULT_DELIMITER
    min_chunk_length: int = DEFAULT_MIN_CHUNK_LENGTH
    tag_names: dict[Role, str] = dict(DEFAULT_TAG_NAMES)
    aliases: dict[Role, tuple[str, ...]] = dict(DEFAULT_ALIASES)
    defaults: dict[Role, str] = dict(DEFAULT_VALUES)
    strip_single_emphasis: bool = True

    @field_validator("delimiter")
    @classmethod
    def delimiter_must_be_present(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("delimiter must not be blank")
        return v.strip()

    @field_validator("min_chunk_length")
    @classmethod
    def min_chunk_length_must_be_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("min_chunk_length must be zero or positive")
        return v

    @field_validator("tag_names")
    @classmethod
    def tag_names_must_be_words(cls, v: dict[Role, str]) -> dict[Role, str]:
        merged = DEFAULT_TAG_NAMES | {role: name.strip() for role, name in v.items()}
        for role, name in merged.items():
            if not TAG_NAME_RE.match(name):
                raise ValueError(f"tag name for {role.value} must be a single word: {name!r}")
        upper = [name.upper() for name in merged.values()]
        if len(set(upper)) != len(upper):
            raise ValueError(f"tag names must be distinct: {sorted(upper)}")
        return merged

    @field_validator("aliases")
    @classmethod
    def aliases_must_not_be_blank(
        cls, v: dict[Role, tuple[str, ...]]
    ) -> dict[Role, tuple[str, ...]]:
        merged = DEFAULT_ALIASES | {
            role: tuple(label.strip() for label in labels) for role, labels in v.items()
        }
        for role, labels in merged.items():
            if any(not label for label in labels):
                raise ValueError(f"blank alias label for {role.value}")
        return merged

    @field_validator("defaults")
    @classmethod
    def defaults_must_not_be_empty(cls, v: dict[Role, str]) -> dict[Role, str]:
        if Role.BODY in v:
            # The body always falls back to the chunk text itself.
            raise ValueError("body has no configurable default")
        merged = DEFAULT_VALUES | {role: text.strip() for role, text in v.items()}
        for role in SHORT_ROLES:
            if not merged.get(role):
                raise ValueError(f"default for {role.value} must not be empty")
        return merged

    def tag_name(self, role: Role) -> str:
        return self.tag_names[role]

    def default_for(self, role: Role) -> str:
        return self.defaults[role]


def load_config(path: Optional[Path] = None, **overrides) -> ParserConfig:
    """
    Load a ParserConfig from a YAML file. With no path, return the defaults.
    Keyword overrides that are not None win over the file contents.
    """
    data: dict = {}
    if path is not None:
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        data.update(loaded)
        logging.debug(f"Loaded parser config from {path}: {sorted(loaded)}")
    data.update({k: val for k, val in overrides.items() if val is not None})
    return ParserConfig(**data)
