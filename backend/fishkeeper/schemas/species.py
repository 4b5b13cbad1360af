# backend/fishkeeper/schemas/species.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SpeciesIn(BaseModel):
    """One entry of the catalog JSON (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True)

    scientific_name: str = Field(alias="scientificName", min_length=1)
    common_english_name: Optional[str] = Field(None, alias="commonEnglishName")
    family_name: str = Field(alias="familyName")
    image_url: str = Field("", alias="imageURL")


class SpeciesOut(BaseModel):
    scientific_name: str
    common_english_name: Optional[str] = None
    family_name: str
    image_url: str
    saved: bool = False
