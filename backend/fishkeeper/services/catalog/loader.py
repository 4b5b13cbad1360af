# backend/fishkeeper/services/catalog/loader.py
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session

from fishkeeper.errors import CatalogError
from fishkeeper.logging_setup import get_logger
from fishkeeper.models.species import Species
from fishkeeper.schemas.species import SpeciesIn
from fishkeeper.services.search.engine import text_matches

logger = get_logger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parents[2] / "data" / "catalog.json"


def load_catalog_file(path: Path) -> list[SpeciesIn]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise CatalogError(f"catalog {path} must be a JSON list")
    try:
        return [SpeciesIn.model_validate(item) for item in raw]
    except SchemaError as exc:
        raise CatalogError(f"invalid catalog entry in {path}: {exc}") from exc


def seed_catalog(db: Session, entries: Iterable[SpeciesIn]) -> int:
    """Insert catalog entries that are not present yet; returns inserted count."""
    existing = {name for (name,) in db.query(Species.scientific_name).all()}
    added = 0
    for e in entries:
        # カタログは1種1行。重複は先勝ち
        if e.scientific_name in existing:
            continue
        db.add(Species(
            scientific_name=e.scientific_name,
            common_english_name=e.common_english_name,
            family_name=e.family_name,
            image_url=e.image_url,
        ))
        existing.add(e.scientific_name)
        added += 1
    db.commit()
    logger.info("catalog seeded: %d new species", added)
    return added


def search_catalog(species: Iterable[Species], query: Optional[str] = None) -> list[Species]:
    items = list(species)
    q = (query or "").strip()
    if q:
        items = [
            s for s in items
            if text_matches(s.scientific_name, q)
            or text_matches(s.common_english_name, q)
            or text_matches(s.family_name, q)
        ]
    return sorted(items, key=lambda s: s.scientific_name)
