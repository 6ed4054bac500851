from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Literal, Optional

import orjson


class Role(str, Enum):
    """The four fields a post is tagged into."""

    TITLE = "title"
    ANGLE = "angle"
    VISUAL_KEYWORD = "visual_keyword"
    BODY = "body"


SHORT_ROLES: tuple[Role, ...] = (Role.TITLE, Role.ANGLE, Role.VISUAL_KEYWORD)

FieldSource = Literal["tag", "alias", "default"]


@dataclass(frozen=True)
class Record:
    """
    One recovered post. All four fields are always non-empty strings.
    """

    title: str
    angle: str
    visual_keyword: str
    body: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)

    def to_json(self) -> str:
        """
        Serialize the record to a newline-terminated JSON string.
        """
        buf = orjson.dumps(self.as_dict(), option=orjson.OPT_APPEND_NEWLINE)
        return buf.decode("utf-8")


@dataclass(frozen=True)
class ParsedRecord:
    """A Record together with where it came from and how each field was found."""

    record: Record
    index: int
    sources: dict[Role, FieldSource] = field(default_factory=dict)

    @property
    def recognition(self) -> Literal["full", "partial"]:
        if all(self.sources.get(role) == "tag" for role in Role):
            return "full"
        return "partial"

    @property
    def defaulted(self) -> list[Role]:
        return [role for role in Role if self.sources.get(role) == "default"]

    def to_row(self, source: str = "") -> dict[str, str | int]:
        row: dict[str, str | int] = {"source": source, "index": self.index}
        row.update(self.record.as_dict())
        row["recognition"] = self.recognition
        for role in Role:
            row[f"{role.value}_source"] = self.sources.get(role, "default")
        return row


@dataclass(frozen=True)
class Reference:
    """An entry of the numbered source list at the end of a post body."""

    index: int
    title: str
    url: Optional[str] = None
