# app/services/evaluator.py
"""
単位集計と判定。

保存されている状態には触らない。要件と科目リストを受け取り、
専門教育科目の判定と卒業判定の2つをまとめたレポートを返す。
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from app.schemas.course import CourseRecord
from app.schemas.evaluation import (
    CategoryTotalOut,
    ElectiveLimitOut,
    EvaluationOut,
    GraduationReportOut,
    MajorReportOut,
    RulesOut,
)
from app.schemas.requirements import Requirements
from app.utils.category import CategoryTag

logger = logging.getLogger("app.evaluation")

GRADUATION_TOTAL = 126

BASIC_REQUIRED = CategoryTag.required("専門基礎科目")
BASIC_ELECTIVE = CategoryTag.elective("専門基礎科目")
FIELD_REQUIRED = CategoryTag.required("系科目")
FIELD_ELECTIVE = CategoryTag.elective("系科目")
COURSE_REQUIRED = CategoryTag.required("コース科目")
COURSE_ELECTIVE = CategoryTag.elective("コース科目")
OTHER_COURSE_ELECTIVE = CategoryTag.elective("他コース科目")

# 集計対象の7区分（表示順）
TRACKED_CATEGORIES = (
    BASIC_REQUIRED,
    BASIC_ELECTIVE,
    FIELD_REQUIRED,
    FIELD_ELECTIVE,
    COURSE_REQUIRED,
    COURSE_ELECTIVE,
    OTHER_COURSE_ELECTIVE,
)

LABELS = {
    BASIC_REQUIRED: "専門基礎必須",
    BASIC_ELECTIVE: "専門基礎選択",
    FIELD_REQUIRED: "系科目必須",
    FIELD_ELECTIVE: "系科目選択",
    COURSE_REQUIRED: "コース科目必須",
    COURSE_ELECTIVE: "コース科目選択",
    OTHER_COURSE_ELECTIVE: "他コース選択",
}


@dataclass(frozen=True)
class ElectiveLimit:
    min: int
    max: Optional[int] = None  # None = 上限なし

    def clamp(self, value):
        if self.max is None or value <= self.max:
            return value
        return self.max


ELECTIVE_LIMITS: Dict[CategoryTag, ElectiveLimit] = {
    BASIC_ELECTIVE: ElectiveLimit(min=4, max=8),
    FIELD_ELECTIVE: ElectiveLimit(min=4, max=8),
    COURSE_ELECTIVE: ElectiveLimit(min=16),
    OTHER_COURSE_ELECTIVE: ElectiveLimit(min=0, max=6),
}

# 選択単位の最低ラインはコース科目選択＋他コース選択で見る
ELECTIVE_CHECK_CATEGORIES = (COURSE_ELECTIVE, OTHER_COURSE_ELECTIVE)
ELECTIVE_CHECK_MIN = ELECTIVE_LIMITS[COURSE_ELECTIVE].min

UNCHECKED_REQUIRED_PREFIX = "必須科目が未チェックです："


def accumulate(requirements: Requirements, courses: Iterable[CourseRecord]) -> Dict[CategoryTag, float]:
    """区分ごとの修得単位（上限適用前）。専門基礎必須には修得済み専門単位を最初から入れておく。"""
    totals = {tag: 0 for tag in TRACKED_CATEGORIES}
    totals[BASIC_REQUIRED] = requirements.obtained_specialized

    for c in courses:
        if c.completed and c.category in totals:
            totals[c.category] += c.credits
    return totals


def apply_limits(totals: Dict[CategoryTag, float]) -> Dict[CategoryTag, float]:
    out = dict(totals)
    for tag, limit in ELECTIVE_LIMITS.items():
        out[tag] = limit.clamp(out[tag])
    return out


def unchecked_required(courses: Iterable[CourseRecord]) -> List[str]:
    return [c.name for c in courses if c.category.is_required and not c.completed]


def required_warning(names: List[str]) -> Optional[str]:
    if not names:
        return None
    return UNCHECKED_REQUIRED_PREFIX + "、".join(names)


def evaluate(
    requirements: Requirements,
    courses: Iterable[CourseRecord],
    graduation_total: int = GRADUATION_TOTAL,
) -> EvaluationOut:
    courses = list(courses)

    raw = accumulate(requirements, courses)
    totals = apply_limits(raw)

    missing = unchecked_required(courses)

    specialized_total = sum(totals[tag] for tag in TRACKED_CATEGORIES)
    elective_check_total = sum(totals[tag] for tag in ELECTIVE_CHECK_CATEGORIES)

    major_passed = (
        specialized_total >= requirements.specialized
        and elective_check_total >= ELECTIVE_CHECK_MIN
    )

    rows = []
    for tag in TRACKED_CATEGORIES:
        limit = ELECTIVE_LIMITS.get(tag)
        rows.append(CategoryTotalOut(
            category=str(tag),
            label=LABELS[tag],
            total=totals[tag],
            min=limit.min if limit else None,
            max=limit.max if limit else None,
            capped=totals[tag] != raw[tag],
        ))

    total_credits = specialized_total + requirements.obtained_general_education
    graduation_passed = total_credits >= graduation_total

    logger.info(
        "evaluated %d courses: specialized=%s elective=%s major=%s total=%s graduation=%s",
        len(courses), specialized_total, elective_check_total, major_passed,
        total_credits, graduation_passed,
    )

    return EvaluationOut(
        required_warning=required_warning(missing),
        unchecked_required=missing,
        major=MajorReportOut(
            categories=rows,
            specialized_total=specialized_total,
            required_specialized=requirements.specialized,
            elective_check_total=elective_check_total,
            elective_check_min=ELECTIVE_CHECK_MIN,
            passed=major_passed,
        ),
        graduation=GraduationReportOut(
            total_credits=total_credits,
            required_total=graduation_total,
            passed=graduation_passed,
        ),
    )


def rules(graduation_total: int = GRADUATION_TOTAL) -> RulesOut:
    """説明パネル用。上限表は evaluate と同じものを返す。"""
    return RulesOut(
        tracked_categories=[str(tag) for tag in TRACKED_CATEGORIES],
        elective_limits=[
            ElectiveLimitOut(category=str(tag), label=LABELS[tag], min=limit.min, max=limit.max)
            for tag, limit in ELECTIVE_LIMITS.items()
        ],
        elective_check_categories=[str(tag) for tag in ELECTIVE_CHECK_CATEGORIES],
        elective_check_min=ELECTIVE_CHECK_MIN,
        graduation_total=graduation_total,
    )
