# backend/fishkeeper/models/species.py
from sqlalchemy import Column, String
from .base import Base


class Species(Base):
    __tablename__ = "species"
    # 参照カタログ（読み取り専用）。1種1行
    scientific_name = Column(String, primary_key=True)
    common_english_name = Column(String, nullable=True)
    family_name = Column(String, nullable=False)
    image_url = Column(String, nullable=False, default="")
