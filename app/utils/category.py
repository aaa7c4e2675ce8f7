from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

SEPARATOR = "_"


class CategoryKind(str, Enum):
    REQUIRED = "必須"
    ELECTIVE = "選択"


class CategoryTag(BaseModel):
    """
    "専門基礎科目_必須" -> CategoryTag(group="専門基礎科目", kind=REQUIRED)

    末尾が「_必須」「_選択」でない文字列は group にそのまま入れ、kind は None。
    """
    model_config = ConfigDict(frozen=True)

    group: str
    kind: Optional[CategoryKind] = None

    @classmethod
    def parse(cls, text: str) -> "CategoryTag":
        text = (text or "").strip()
        for kind in CategoryKind:
            suffix = SEPARATOR + kind.value
            if text.endswith(suffix) and len(text) > len(suffix):
                return cls(group=text[: -len(suffix)], kind=kind)
        return cls(group=text)

    @classmethod
    def required(cls, group: str) -> "CategoryTag":
        return cls(group=group, kind=CategoryKind.REQUIRED)

    @classmethod
    def elective(cls, group: str) -> "CategoryTag":
        return cls(group=group, kind=CategoryKind.ELECTIVE)

    @property
    def is_required(self) -> bool:
        return self.kind == CategoryKind.REQUIRED

    @property
    def is_elective(self) -> bool:
        return self.kind == CategoryKind.ELECTIVE

    def __str__(self) -> str:
        if self.kind is None:
            return self.group
        return f"{self.group}{SEPARATOR}{self.kind.value}"
