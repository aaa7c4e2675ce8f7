# app/services/course_list.py
import logging
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from app.schemas.course import CourseRecord
from app.utils.kv_store import KeyValueStore, COURSES_KEY

logger = logging.getLogger("app.courses")

# (group, [(list position, record), ...])
CourseGroup = Tuple[str, List[Tuple[int, CourseRecord]]]


class CourseListManager:
    """登録順を保った科目リスト。変更のたびに保存する。"""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv
        self._courses: List[CourseRecord] = []

    def load(self) -> "CourseListManager":
        data = self.kv.get_json(COURSES_KEY, [])
        if not isinstance(data, list):
            logger.warning("stored course list is not an array, ignoring it")
            data = []

        courses = []
        for item in data:
            try:
                courses.append(CourseRecord.model_validate(item))
            except ValidationError:
                logger.warning("skipping unreadable stored course: %r", item)
        self._courses = courses
        return self

    def save(self) -> None:
        self.kv.set_json(COURSES_KEY, [c.model_dump() for c in self._courses])

    @property
    def courses(self) -> Tuple[CourseRecord, ...]:
        return tuple(self._courses)

    def get(self, index: int) -> Optional[CourseRecord]:
        if 0 <= index < len(self._courses):
            return self._courses[index]
        return None

    def add(self, course: CourseRecord) -> None:
        self._courses.append(course)
        self.save()

    def mark_all_required_complete(self) -> int:
        changed = 0
        for c in self._courses:
            if c.category.is_required and not c.completed:
                c.completed = True
                changed += 1
        self.save()
        return changed

    def remove(self, course: CourseRecord) -> bool:
        for i, c in enumerate(self._courses):
            if c is course:
                del self._courses[i]
                self.save()
                return True
        return False

    def toggle_complete(self, course: CourseRecord, value: bool) -> None:
        course.completed = value
        self.save()

    def replace(self, courses: Iterable[CourseRecord]) -> None:
        self._courses = list(courses)
        self.save()

    def list(self, keyword: Optional[str] = None) -> List[CourseGroup]:
        keyword = (keyword or "").strip().lower()

        groups: dict = {}
        for i, c in enumerate(self._courses):
            if keyword and keyword not in c.name.lower():
                continue
            groups.setdefault(c.category.group, []).append((i, c))

        # dict は挿入順なので、最初に出てきた区分順になる
        return list(groups.items())
