import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from fishkeeper.errors import DuplicateRecordError, StoreError
from fishkeeper.models.saved_fish import SavedFish
from fishkeeper.services.store.records import RecordStore

from conftest import make_fish


def test_insert_and_commit_persists(store, session, shark):
    store.insert_and_commit(shark)
    assert session.query(SavedFish).count() == 1
    assert store.get("Carcharodon carcharias").common_name == "Great White Shark"


def test_insert_then_save(store, shark, tuna):
    store.insert(shark)
    store.insert(tuna)
    store.save()
    assert sorted(f.scientific_name for f in store.query_all()) == [
        "Carcharodon carcharias",
        "Thunnus albacares",
    ]


def test_duplicate_insert_is_rejected(store, shark):
    store.insert_and_commit(shark)
    with pytest.raises(DuplicateRecordError):
        store.insert_and_commit(make_fish("Carcharodon carcharias"))
    assert len(store.query_all()) == 1


def test_delete_and_commit(store, shark, tuna):
    store.insert_and_commit(shark)
    store.insert_and_commit(tuna)
    store.delete_and_commit(shark)
    assert [f.scientific_name for f in store.query_all()] == ["Thunnus albacares"]
    assert store.get("Carcharodon carcharias") is None


def test_commit_failure_rolls_back_insert(store, session, shark, monkeypatch):
    def boom():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(session, "commit", boom)
    with pytest.raises(StoreError):
        store.insert_and_commit(shark)
    monkeypatch.undo()
    assert store.query_all() == []


def test_commit_failure_keeps_deleted_record(store, session, shark, monkeypatch):
    store.insert_and_commit(shark)

    def boom():
        raise SQLAlchemyError("locked")

    monkeypatch.setattr(session, "commit", boom)
    with pytest.raises(StoreError) as excinfo:
        store.delete_and_commit(store.get("Carcharodon carcharias"))
    assert not isinstance(excinfo.value, DuplicateRecordError)
    monkeypatch.undo()
    assert [f.scientific_name for f in store.query_all()] == ["Carcharodon carcharias"]


def test_negative_count_is_refused_by_the_database(store):
    with pytest.raises(StoreError) as excinfo:
        store.insert_and_commit(make_fish("Mola mola", count=-1))
    assert not isinstance(excinfo.value, DuplicateRecordError)
    assert store.query_all() == []


def locked(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_failed_lookup_becomes_store_error(store, session, monkeypatch):
    monkeypatch.setattr(session, "get", locked)
    with pytest.raises(StoreError):
        store.get("Carcharodon carcharias")


def test_failed_query_becomes_store_error(store, session, monkeypatch):
    monkeypatch.setattr(session, "query", locked)
    with pytest.raises(StoreError):
        store.query_all()


def test_lost_connection_during_delete_still_raises_store_error(store, session, shark, monkeypatch):
    store.insert_and_commit(shark)
    record = store.get("Carcharodon carcharias")

    def gone(*args, **kwargs):
        raise OperationalError("DELETE", {}, Exception("connection lost"))

    # flush も、その後の SELECT（expire された属性の再読込）も失敗する
    monkeypatch.setattr(session, "flush", gone)
    monkeypatch.setattr(session, "execute", gone)
    with pytest.raises(StoreError) as excinfo:
        store.delete_and_commit(record)
    assert "delete failed" in str(excinfo.value)


def test_concurrent_insert_of_same_species_is_duplicate(store, session_factory, shark, monkeypatch):
    store.insert_and_commit(shark)
    other_session = session_factory()
    try:
        other = RecordStore(other_session)
        # 事前チェックを同時にすり抜けた状態を再現
        monkeypatch.setattr(other, "get", lambda name: None)
        with pytest.raises(DuplicateRecordError):
            other.insert_and_commit(make_fish("Carcharodon carcharias"))
    finally:
        other_session.close()
    assert len(store.query_all()) == 1
