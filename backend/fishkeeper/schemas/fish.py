# backend/fishkeeper/schemas/fish.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from .commons import FilterOption, SortOption


class AnnotationIn(BaseModel):
    # 追加フォームの状態。フォームを開くたびに新しく作る
    model_config = ConfigDict(frozen=True)

    has_custom_title: bool = False
    custom_title: Optional[str] = None
    has_note: bool = False
    note: Optional[str] = None
    has_fish_count: bool = False
    fish_count: int = Field(1, ge=0)


class ValidationOut(BaseModel):
    valid: bool


class SavedFishOut(BaseModel):
    scientific_name: str
    common_name: Optional[str] = None
    family_name: str
    title: Optional[str] = None
    note: Optional[str] = None
    count: int
    date_time: datetime


class ListState(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    filter_option: FilterOption = FilterOption.keyword
    sort_option: SortOption = SortOption.date_descending
