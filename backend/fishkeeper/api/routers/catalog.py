from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from fishkeeper.db import get_db
from fishkeeper.models.saved_fish import SavedFish
from fishkeeper.models.species import Species
from fishkeeper.schemas.species import SpeciesOut
from fishkeeper.services.catalog.loader import search_catalog

router = APIRouter()


def _out(s: Species, saved: bool) -> SpeciesOut:
    return SpeciesOut(
        scientific_name=s.scientific_name,
        common_english_name=s.common_english_name,
        family_name=s.family_name,
        image_url=s.image_url or "",
        saved=saved,
    )


@router.get("")
@router.get("/")
def list_species(q: Optional[str] = None, db: Session = Depends(get_db)) -> list[SpeciesOut]:
    saved = {name for (name,) in db.query(SavedFish.scientific_name).all()}
    rows = search_catalog(db.query(Species).all(), q)
    return [_out(s, s.scientific_name in saved) for s in rows]


@router.get("/{scientific_name}")
def get_species(scientific_name: str, db: Session = Depends(get_db)) -> SpeciesOut:
    s = db.get(Species, scientific_name)
    if not s:
        raise HTTPException(status_code=404, detail="species not found")
    return _out(s, db.get(SavedFish, scientific_name) is not None)
