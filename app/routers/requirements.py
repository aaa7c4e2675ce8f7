from fastapi import APIRouter, Depends

from app.schemas.requirements import Requirements, RequirementsUpdateIn
from app.services.requirements_store import RequirementsStore
from app.utils.state import get_requirements_store

import logging
logger = logging.getLogger("app.requirements")


router = APIRouter(prefix="/requirements", tags=["Requirements"])


@router.get("", response_model=Requirements)
def get_requirements(store: RequirementsStore = Depends(get_requirements_store)):
    return store.get()


# 入力された項目だけ更新（負の値は 0 になる）
@router.put("", response_model=Requirements)
def update_requirements(
    body: RequirementsUpdateIn,
    store: RequirementsStore = Depends(get_requirements_store),
):
    data = body.model_dump(exclude_none=True)
    for field, value in data.items():
        store.set(field, value)
    if data:
        logger.info("requirements updated: %s", data)
    return store.get()
