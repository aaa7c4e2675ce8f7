# app/utils/kv_store.py
import json
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.kv_entry import KeyValueEntry

logger = logging.getLogger("app.kv_store")

REQUIREMENTS_KEY = "requirements"
COURSES_KEY = "courses"


class KeyValueStore:
    """
    localStorage 相当の保存先。値は JSON テキストで持つ。
    読めないデータは「無いもの」として扱う。
    """

    def __init__(self, db: Session):
        self.db = db

    def get_raw(self, key: str) -> Optional[str]:
        row = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
        return row.value if row else None

    def set_raw(self, key: str, value: str) -> None:
        row = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
        if row:
            row.value = value
        else:
            self.db.add(KeyValueEntry(key=key, value=value))
        self.db.commit()

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("stored entry %r is not valid JSON, ignoring it", key)
            return default

    def set_json(self, key: str, value: Any) -> None:
        self.set_raw(key, json.dumps(value, ensure_ascii=False))
