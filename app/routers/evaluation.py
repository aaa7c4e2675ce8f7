from fastapi import APIRouter, Depends

from app.config import settings
from app.schemas.evaluation import EvaluationOut, RulesOut
from app.services.course_list import CourseListManager
from app.services.evaluator import evaluate, rules
from app.services.requirements_store import RequirementsStore
from app.utils.state import get_course_list, get_requirements_store

import logging
logger = logging.getLogger("app.evaluation")

router = APIRouter(tags=["Evaluation"])


# 判定を実行（保存されている状態は変えない）
@router.post("/evaluation", response_model=EvaluationOut)
def run_evaluation(
    store: RequirementsStore = Depends(get_requirements_store),
    courses: CourseListManager = Depends(get_course_list),
):
    report = evaluate(store.get(), courses.courses, graduation_total=settings.GRADUATION_TOTAL)
    if report.required_warning:
        logger.info("evaluation with unchecked required courses: %s", report.unchecked_required)
    return report


# 使い方パネル用：上限表と卒業単位
@router.get("/rules", response_model=RulesOut)
def get_rules():
    return rules(graduation_total=settings.GRADUATION_TOTAL)
