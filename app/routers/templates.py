import httpx
from fastapi import APIRouter, Depends, HTTPException

from app.schemas.template import TemplateLoadOut
from app.services.course_list import CourseListManager
from app.services.requirements_store import RequirementsStore
from app.services.template_loader import apply_template, fetch_template
from app.utils.state import get_course_list, get_requirements_store, get_template_client

import logging
logger = logging.getLogger("app.templates")


router = APIRouter(prefix="/templates", tags=["Templates"])

LOADED_NOTICE = "学科テンプレートを読み込みました！"
FAILED_NOTICE = "テンプレートの読み込みに失敗しました"


@router.post("/{name}/load", response_model=TemplateLoadOut)
async def load_template(
    name: str,
    client: httpx.AsyncClient = Depends(get_template_client),
    store: RequirementsStore = Depends(get_requirements_store),
    courses: CourseListManager = Depends(get_course_list),
):
    """
    学科テンプレートを取得して、要件と科目リストを丸ごと置き換える。
    取得・解析に失敗したときは何も変更しない。
    """
    try:
        template = await fetch_template(client, name)
    except (httpx.HTTPError, ValueError):
        logger.exception("template %r could not be loaded", name)
        raise HTTPException(status_code=502, detail=FAILED_NOTICE)

    apply_template(template, store, courses)

    return TemplateLoadOut(
        message=LOADED_NOTICE,
        name=name,
        course_count=len(courses.courses),
        requirements=store.get(),
    )
