from __future__ import annotations
from typing import Iterable, List, Dict, Any
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment, PatternFill

from app.schemas.course import CourseRecord

# 取り込み側 (excel_import) と同じ見出し
COLUMNS = ["科目名", "区分", "単位数", "修得済"]

REQUIRED_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")


def course_rows(courses: Iterable[CourseRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "科目名": c.name,
            "区分": str(c.category),
            "単位数": c.credits,
            "修得済": "○" if c.completed else "",
        }
        for c in courses
    ]


def courses_to_xlsx_bytes(courses: Iterable[CourseRecord], sheet_name: str = "Courses") -> bytes:
    """
    科目リストを1シートの xlsx にする。必須科目の行は色付け。
    科目が無くても見出し行だけは出す（そのまま取り込み用の雛形になる）。
    """
    courses = list(courses)

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]
    ws.append(COLUMNS)

    header_font = Font(bold=True)
    for col_idx, _h in enumerate(COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for c, row in zip(courses, course_rows(courses)):
        ws.append([row[h] for h in COLUMNS])
        if c.category.is_required:
            for col_idx in range(1, len(COLUMNS) + 1):
                ws.cell(row=ws.max_row, column=col_idx).fill = REQUIRED_FILL

    # autosize columns（全角文字は2文字分）
    for col_idx, h in enumerate(COLUMNS, start=1):
        max_len = _display_len(h)
        for row_idx in range(2, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, _display_len(v))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _display_len(v) -> int:
    return sum(2 if ord(ch) > 0x7F else 1 for ch in str(v))


def make_filename(prefix: str = "courses") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
