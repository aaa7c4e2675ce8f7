# app/services/template_loader.py
import logging
from typing import List

import httpx

from app.schemas.course import CourseRecord
from app.schemas.template import TemplateIn
from app.services.course_list import CourseListManager
from app.services.requirements_store import RequirementsStore
from app.utils.category import CategoryTag

logger = logging.getLogger("app.templates")


def template_filename(name: str) -> str:
    name = (name or "").strip()
    return name if name.endswith(".json") else f"{name}.json"


async def fetch_template(client: httpx.AsyncClient, name: str) -> TemplateIn:
    """
    client の base_url からテンプレート JSON を1回だけ取得する（リトライなし）。
    通信エラー・HTTPエラー・JSON/形式エラーはそのまま送出する。
    """
    filename = template_filename(name)
    resp = await client.get(filename)
    resp.raise_for_status()
    return TemplateIn.model_validate(resp.json())


def build_courses(template: TemplateIn) -> List[CourseRecord]:
    courses = []
    for cat in template.categories:
        for c in cat.courses:
            if c.sub_category:
                tag = CategoryTag.parse(c.sub_category)
            elif c.required:
                tag = CategoryTag.required(cat.name)
            else:
                tag = CategoryTag.elective(cat.name)
            courses.append(CourseRecord(name=c.name, category=tag, credits=c.credits, completed=False))
    return courses


def apply_template(template: TemplateIn, store: RequirementsStore, course_list: CourseListManager) -> None:
    # 区分ごとの必要単位は合計して専門の必要単位にする（内訳は残らない）
    specialized = sum(cat.required_credits or 0 for cat in template.categories)

    values = {"specialized": specialized}
    if template.general_education_required is not None:
        values["general_edu"] = template.general_education_required

    # 先に新しいリストを作り切ってから置き換える
    courses = build_courses(template)

    course_list.replace(courses)
    store.replace(**values)

    logger.info("template applied: %d courses, specialized=%s", len(courses), specialized)
