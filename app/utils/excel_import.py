from typing import BinaryIO, List, Optional, Tuple

import pandas as pd

from app.schemas.course import CourseRecord
from app.utils.category import CategoryTag

DONE_MARKS = {"○", "◯", "o", "y", "yes", "true", "1", "済"}


def to_str(v) -> Optional[str]:
    if v is None or (not isinstance(v, str) and pd.isna(v)):
        return None
    s = str(v).strip()
    return None if s == "" or s.lower() == "nan" else s


def to_int(v) -> Optional[int]:
    if v is None or (not isinstance(v, str) and pd.isna(v)):
        return None
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return None


def to_done(v) -> bool:
    s = to_str(v)
    return bool(s) and s.lower() in DONE_MARKS


def read_courses_xlsx(file: BinaryIO) -> Tuple[List[CourseRecord], int]:
    """
    export と同じ見出し（科目名 / 区分 / 単位数 / 修得済）の xlsx を読む。
    科目名が空・単位数が数値でない/負の行は飛ばして、その件数を返す。
    """
    df = pd.read_excel(file, dtype=object)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in ("科目名", "区分", "単位数") if c not in df.columns]
    if missing:
        raise ValueError(f"missing columns: {', '.join(missing)}")

    courses: List[CourseRecord] = []
    skipped = 0
    for _, row in df.iterrows():
        name = to_str(row.get("科目名"))
        category = to_str(row.get("区分"))
        credits = to_int(row.get("単位数"))
        if not name or not category or credits is None or credits < 0:
            skipped += 1
            continue
        courses.append(CourseRecord(
            name=name,
            category=CategoryTag.parse(category),
            credits=credits,
            completed=to_done(row.get("修得済")),
        ))
    return courses, skipped
