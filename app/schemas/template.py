from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.requirements import Number, Requirements


class TemplateCourse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    credits: int = Field(ge=0)
    required: bool = False
    sub_category: Optional[str] = Field(None, alias="subCategory")


class TemplateCategory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    required_credits: Optional[Number] = Field(None, alias="requiredCredits")
    courses: List[TemplateCourse]


class TemplateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    general_education_required: Optional[Number] = Field(None, alias="generalEducationRequired")
    categories: List[TemplateCategory]


class TemplateLoadOut(BaseModel):
    message: str
    name: str
    course_count: int
    requirements: Requirements
