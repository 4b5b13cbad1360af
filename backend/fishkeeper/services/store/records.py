# backend/fishkeeper/services/store/records.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fishkeeper.errors import DuplicateRecordError, StoreError
from fishkeeper.logging_setup import get_logger
from fishkeeper.models.saved_fish import SavedFish

logger = get_logger(__name__)

# 主キー / UNIQUE 違反のメッセージ（SQLite, PostgreSQL）
_DUPLICATE_MARKERS = ("unique constraint", "duplicate key")


def _is_duplicate(exc: SQLAlchemyError) -> bool:
    if not isinstance(exc, IntegrityError):
        return False
    text = str(exc.orig).lower()
    return any(m in text for m in _DUPLICATE_MARKERS)


class RecordStore:
    """Saved fish collection backed by a SQLAlchemy session.

    ``insert`` / ``delete`` only stage changes; ``save`` commits them.
    ``insert_and_commit`` / ``delete_and_commit`` do both in one step and
    roll back on failure, so callers never see a half-applied mutation.
    Every SQLAlchemy failure, reads included, surfaces as StoreError.
    """

    def __init__(self, db: Session):
        self.db = db

    def query_all(self) -> list[SavedFish]:
        try:
            return self.db.query(SavedFish).all()
        except SQLAlchemyError as exc:
            self._fail("query", None, exc)

    def get(self, scientific_name: str) -> Optional[SavedFish]:
        try:
            return self.db.get(SavedFish, scientific_name)
        except SQLAlchemyError as exc:
            self._fail("get", scientific_name, exc)

    def insert(self, record: SavedFish) -> None:
        name = record.scientific_name
        # 同じ学名が既にあれば flush 前に弾く（identity map 衝突を避ける）
        if self.get(name) is not None:
            logger.warning("fish %s already saved", name)
            raise DuplicateRecordError(f"{name} is already saved")
        try:
            self.db.add(record)
            self.db.flush()
        except SQLAlchemyError as exc:
            # 同時保存で事前チェックをすり抜けた場合は DB の制約で検出
            self._fail("insert", name, exc)

    def delete(self, record: SavedFish) -> None:
        name = record.scientific_name
        try:
            self.db.delete(record)
            self.db.flush()
        except SQLAlchemyError as exc:
            self._fail("delete", name, exc)

    def save(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("save", None, exc)

    def insert_and_commit(self, record: SavedFish) -> SavedFish:
        self.insert(record)
        self.save()
        try:
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self._fail("refresh", None, exc)
        logger.info("saved fish %s", record.scientific_name)
        return record

    def delete_and_commit(self, record: SavedFish) -> None:
        name = record.scientific_name
        self.delete(record)
        self.save()
        logger.info("deleted fish %s", name)

    def _fail(self, action: str, name: Optional[str], exc: SQLAlchemyError):
        # rollback 後は ORM 属性が expire されるので、名前は呼び出し側で先に取得しておく
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.warning("rollback after failed %s also failed", action, exc_info=True)
        logger.exception("record store %s failed (scientific_name=%s)", action, name)
        if action == "insert" and _is_duplicate(exc):
            raise DuplicateRecordError(f"{name} is already saved") from exc
        raise StoreError(f"{action} failed: {exc.__class__.__name__}") from exc
