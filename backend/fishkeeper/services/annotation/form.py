# backend/fishkeeper/services/annotation/form.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fishkeeper.errors import ValidationError
from fishkeeper.logging_setup import get_logger
from fishkeeper.models.saved_fish import SavedFish
from fishkeeper.models.species import Species
from fishkeeper.schemas.fish import AnnotationIn
from fishkeeper.services.store.records import RecordStore
from fishkeeper.util.time import utcnow

logger = get_logger(__name__)

DEFAULT_FISH_COUNT = 1


def _filled(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def is_form_valid(form: AnnotationIn) -> bool:
    # ON にした項目は空白以外の文字が必要。匹数は制約なし（ge=0 はスキーマ側）
    if form.has_custom_title and not _filled(form.custom_title):
        return False
    if form.has_note and not _filled(form.note):
        return False
    return True


def build_record(species: Species, form: AnnotationIn, now: datetime) -> SavedFish:
    return SavedFish(
        scientific_name=species.scientific_name,
        common_name=species.common_english_name,
        family_name=species.family_name,
        title=form.custom_title if form.has_custom_title else None,
        note=form.note if form.has_note else None,
        count=form.fish_count if form.has_fish_count else DEFAULT_FISH_COUNT,
        date_time=now,
    )


def save_annotation(
    store: RecordStore,
    species: Species,
    form: AnnotationIn,
    now: Optional[datetime] = None,
) -> SavedFish:
    """Persist a new saved-fish record built from ``species`` and ``form``.

    Raises ValidationError before touching the store when the form is
    invalid. StoreError from the store propagates after being logged there.
    """
    if not is_form_valid(form):
        raise ValidationError("custom title / note must not be blank when enabled")
    record = build_record(species, form, now or utcnow())
    return store.insert_and_commit(record)
