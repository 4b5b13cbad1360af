# backend/fishkeeper/services/collection/presenter.py
from __future__ import annotations

from fishkeeper.errors import StoreError
from fishkeeper.logging_setup import get_logger
from fishkeeper.models.saved_fish import SavedFish
from fishkeeper.schemas.commons import Notice
from fishkeeper.schemas.fish import ListState
from fishkeeper.services.search.engine import compute_view
from fishkeeper.services.store.records import RecordStore

logger = get_logger(__name__)

DELETED_MESSAGE = "Deleted Successfully"


class CollectionListPresenter:
    """My fish list: current rows for a list state, plus swipe-to-delete."""

    def __init__(self, store: RecordStore):
        self.store = store

    def rows(self, state: ListState = ListState()) -> list[SavedFish]:
        # ストアの最新状態を毎回取り直す
        return compute_view(
            self.store.query_all(),
            state.search_text,
            state.filter_option,
            state.sort_option,
        )

    def delete(self, scientific_name: str) -> Notice:
        try:
            record = self.store.get(scientific_name)
            if record is None:
                logger.warning("delete requested for unknown fish %s", scientific_name)
                return Notice(ok=False, message=f"{scientific_name} is not in your list")
            self.store.delete_and_commit(record)
        except StoreError as exc:
            # 失敗しても画面は止めない（ログ済み）
            return Notice(ok=False, message=str(exc))
        return Notice(ok=True, message=DELETED_MESSAGE)
