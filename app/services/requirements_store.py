# app/services/requirements_store.py
import logging
import math
from typing import Dict, Optional

from app.schemas.requirements import Number, Requirements
from app.utils.kv_store import KeyValueStore, REQUIREMENTS_KEY

logger = logging.getLogger("app.requirements")

FIELDS = tuple(Requirements.model_fields)

# 保存時の名前 (generalEdu など) -> 属性名
ALIASES: Dict[str, str] = {
    (info.alias or name): name for name, info in Requirements.model_fields.items()
}


def to_number(value) -> Optional[Number]:
    """
    保存データの値を数値にする。入力欄の値が文字列で保存されていることもある。
    数値にできないものは None。
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        num = value
    else:
        s = str(value).strip()
        try:
            num = int(s)
        except ValueError:
            try:
                num = float(s)
            except ValueError:
                return None
    if isinstance(num, float) and not math.isfinite(num):
        return None
    return num


def clamp(value: Number) -> Number:
    return value if value > 0 else 0


def resolve_field(field: str) -> str:
    if field in FIELDS:
        return field
    if field in ALIASES:
        return ALIASES[field]
    raise KeyError(field)


class RequirementsStore:
    """卒業要件の4つの数値。どの値も 0 未満にはならない。"""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv
        self._values: Dict[str, Number] = {name: 0 for name in FIELDS}

    def load(self) -> "RequirementsStore":
        data = self.kv.get_json(REQUIREMENTS_KEY, {})
        if not isinstance(data, dict):
            logger.warning("stored requirements are not an object, ignoring them")
            return self

        for key, value in data.items():
            try:
                name = resolve_field(key)
            except KeyError:
                continue
            num = to_number(value)
            if num is None:
                continue
            self._values[name] = clamp(num)
        return self

    def save(self) -> None:
        self.kv.set_json(REQUIREMENTS_KEY, self.get().model_dump(by_alias=True))

    def get(self) -> Requirements:
        return Requirements(**self._values)

    def set(self, field: str, value: Number) -> None:
        name = resolve_field(field)
        self._values[name] = clamp(value)
        self.save()

    def replace(self, **values: Number) -> None:
        for field, value in values.items():
            self._values[resolve_field(field)] = clamp(value)
        self.save()
