import zipfile
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse

from app.schemas.course import (
    CompletedIn,
    CourseEntryOut,
    CourseGroupOut,
    CourseIn,
    CourseListOut,
    CourseRecord,
)
from app.services.course_list import CourseListManager
from app.utils.category import CategoryTag
from app.utils.excel_export import courses_to_xlsx_bytes, make_filename
from app.utils.excel_import import read_courses_xlsx
from app.utils.state import get_course_list

import logging
logger = logging.getLogger("app.courses")


router = APIRouter(prefix="/courses", tags=["Courses"])

INVALID_COURSE_NOTICE = "入力不足または負の値です"


def to_entry(index: int, c: CourseRecord) -> CourseEntryOut:
    return CourseEntryOut(
        index=index,
        name=c.name,
        category=str(c.category),
        group=c.category.group,
        kind=c.category.kind,
        credits=c.credits,
        completed=c.completed,
        required_mark=c.category.is_required,
    )


# 区分ごとにまとめた一覧（keyword は科目名の部分一致、大文字小文字は無視）
@router.get("", response_model=CourseListOut)
def list_courses(
    keyword: Optional[str] = Query(None),
    courses: CourseListManager = Depends(get_course_list),
):
    groups = [
        CourseGroupOut(group=group, courses=[to_entry(i, c) for i, c in rows])
        for group, rows in courses.list(keyword)
    ]
    return CourseListOut(keyword=keyword, total=len(courses.courses), groups=groups)


@router.post("", response_model=CourseEntryOut)
def add_course(body: CourseIn, courses: CourseListManager = Depends(get_course_list)):
    name = (body.name or "").strip()
    if not name or body.credits < 0:
        raise HTTPException(status_code=400, detail=INVALID_COURSE_NOTICE)

    category = body.category
    if isinstance(category, str):
        category = CategoryTag.parse(category)

    course = CourseRecord(name=name, category=category, credits=body.credits, completed=False)
    courses.add(course)
    logger.info("course added: %s (%s, %d)", course.name, course.category, course.credits)
    return to_entry(len(courses.courses) - 1, course)


@router.post("/mark-required-complete")
def mark_required_complete(courses: CourseListManager = Depends(get_course_list)):
    changed = courses.mark_all_required_complete()
    return {"message": "Required courses marked as completed", "changed": changed}


@router.put("/{index}/completed", response_model=CourseEntryOut)
def set_completed(
    index: int,
    body: CompletedIn,
    courses: CourseListManager = Depends(get_course_list),
):
    course = courses.get(index)
    if course is None:
        raise HTTPException(404, "Course not found")

    courses.toggle_complete(course, body.completed)
    return to_entry(index, course)


# 無い番号を消そうとしても何もしない
@router.delete("/{index}")
def remove_course(index: int, courses: CourseListManager = Depends(get_course_list)):
    course = courses.get(index)
    removed = courses.remove(course) if course is not None else False
    if removed:
        logger.info("course removed: %s", course.name)
    return {"message": "Removed" if removed else "Nothing to remove", "removed": removed}


@router.get("/export")
def export_courses(courses: CourseListManager = Depends(get_course_list)):
    xlsx_bytes = courses_to_xlsx_bytes(courses.courses, sheet_name="Courses")
    filename = make_filename("courses")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# export した xlsx と同じ形式のファイルから科目を追加する
@router.post("/import")
def import_courses(
    file: UploadFile = File(...),
    courses: CourseListManager = Depends(get_course_list),
):
    try:
        imported, skipped = read_courses_xlsx(file.file)
    except (ValueError, zipfile.BadZipFile) as e:
        logger.warning("course import rejected: %s", e)
        raise HTTPException(status_code=400, detail=f"Cannot read course sheet: {e}")

    if imported:
        courses.replace([*courses.courses, *imported])
        logger.info("imported %d courses (%d rows skipped)", len(imported), skipped)

    return {
        "message": "Import completed!",
        "inserted": len(imported),
        "skipped": skipped,
        "total_after": len(courses.courses),
    }
