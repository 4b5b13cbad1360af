# backend/fishkeeper/models/saved_fish.py
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from .base import Base


class SavedFish(Base):
    __tablename__ = "saved_fish"
    __table_args__ = (CheckConstraint("count >= 0", name="ck_saved_fish_count"),)

    # 学名が自然キー（一覧の行IDもこれ）
    scientific_name = Column(String, primary_key=True)
    common_name = Column(String, nullable=True)
    family_name = Column(String, nullable=False)
    title = Column(String, nullable=True)  # カスタムタイトル（任意）
    note = Column(String, nullable=True)   # メモ（任意）
    count = Column(Integer, nullable=False, default=1)
    date_time = Column(DateTime, nullable=False)  # 作成日時（UTC, naive）

    def __repr__(self) -> str:
        return f"<SavedFish {self.scientific_name!r} count={self.count}>"
