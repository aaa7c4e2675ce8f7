from pydantic import BaseModel, Field, field_serializer, field_validator
from typing import List, Optional, Union

from app.utils.category import CategoryKind, CategoryTag


class CourseRecord(BaseModel):
    """保存形式: {"name", "category": "系科目_選択", "credits", "completed"}"""
    name: str
    category: CategoryTag
    credits: int = Field(ge=0)
    completed: bool = False

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, v):
        if isinstance(v, str):
            return CategoryTag.parse(v)
        return v

    @field_serializer("category")
    def _dump_category(self, tag: CategoryTag) -> str:
        return str(tag)


class CourseIn(BaseModel):
    name: str = ""
    # "系科目_選択" でも {"group": "系科目", "kind": "選択"} でも可
    category: Union[str, CategoryTag]
    credits: int = 0


class CompletedIn(BaseModel):
    completed: bool


class CourseEntryOut(BaseModel):
    index: int
    name: str
    category: str
    group: str
    kind: Optional[CategoryKind] = None
    credits: int
    completed: bool
    required_mark: bool


class CourseGroupOut(BaseModel):
    group: str
    courses: List[CourseEntryOut] = []


class CourseListOut(BaseModel):
    keyword: Optional[str] = None
    total: int
    groups: List[CourseGroupOut]
