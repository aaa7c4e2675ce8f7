from typing import List, Optional, Union
from pydantic import BaseModel

Number = Union[int, float]


class CategoryTotalOut(BaseModel):
    category: str
    label: str
    total: Number
    min: Optional[int] = None
    max: Optional[int] = None      # None = 上限なし
    capped: bool = False


class MajorReportOut(BaseModel):
    categories: List[CategoryTotalOut]
    specialized_total: Number
    required_specialized: Number
    elective_check_total: Number
    elective_check_min: int
    passed: bool


class GraduationReportOut(BaseModel):
    total_credits: Number
    required_total: int
    passed: bool


class EvaluationOut(BaseModel):
    required_warning: Optional[str] = None
    unchecked_required: List[str] = []
    major: MajorReportOut
    graduation: GraduationReportOut


class ElectiveLimitOut(BaseModel):
    category: str
    label: str
    min: int
    max: Optional[int] = None


class RulesOut(BaseModel):
    tracked_categories: List[str]
    elective_limits: List[ElectiveLimitOut]
    elective_check_categories: List[str]
    elective_check_min: int
    graduation_total: int
