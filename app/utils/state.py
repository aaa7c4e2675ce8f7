# app/utils/state.py
from typing import AsyncIterator

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.services.course_list import CourseListManager
from app.services.requirements_store import RequirementsStore
from app.utils.kv_store import KeyValueStore


def get_kv_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return KeyValueStore(db)


def get_requirements_store(kv: KeyValueStore = Depends(get_kv_store)) -> RequirementsStore:
    return RequirementsStore(kv).load()


def get_course_list(kv: KeyValueStore = Depends(get_kv_store)) -> CourseListManager:
    return CourseListManager(kv).load()


async def get_template_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(base_url=settings.TEMPLATE_BASE_URL) as client:
        yield client
