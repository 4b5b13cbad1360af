# backend/fishkeeper/schemas/commons.py
from enum import Enum
from pydantic import BaseModel


class FilterOption(str, Enum):
    keyword = "keyword"
    title = "title"
    note = "note"
    family_name = "family_name"
    scientific_name = "scientific_name"
    common_name = "common_name"
    none = "none"


class SortOption(str, Enum):
    date_ascending = "date_ascending"
    date_descending = "date_descending"
    name_ascending = "name_ascending"
    name_descending = "name_descending"


class Notice(BaseModel):
    # 画面側のトースト表示用
    ok: bool
    message: str
