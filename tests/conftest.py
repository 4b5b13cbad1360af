import os
from datetime import datetime

# 実ファイルの DB を作らない
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fishkeeper.db import get_db, init_db
from fishkeeper.main import app
from fishkeeper.models.saved_fish import SavedFish
from fishkeeper.models.species import Species
from fishkeeper.services.store.records import RecordStore

T1 = datetime(2023, 10, 7, 9, 0, 0)
T2 = datetime(2023, 10, 19, 14, 30, 0)


def make_fish(scientific_name, family_name="Fam", common_name=None, title=None,
              note=None, count=1, date_time=T1):
    return SavedFish(
        scientific_name=scientific_name,
        common_name=common_name,
        family_name=family_name,
        title=title,
        note=note,
        count=count,
        date_time=date_time,
    )


@pytest.fixture()
def shark():
    return make_fish("Carcharodon carcharias", "Lamnidae", "Great White Shark", date_time=T1)


@pytest.fixture()
def tuna():
    return make_fish("Thunnus albacares", "Scombridae", "Yellowfin Tuna",
                     title="Big one", note="Seen at reef", count=3, date_time=T2)


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def session(session_factory):
    sess = session_factory()
    try:
        yield sess
    finally:
        sess.close()


@pytest.fixture()
def store(session):
    return RecordStore(session)


@pytest.fixture()
def species(session):
    rows = [
        Species(scientific_name="Carcharodon carcharias", common_english_name="Great White Shark",
                family_name="Lamnidae", image_url="https://example.org/shark.jpg"),
        Species(scientific_name="Thunnus albacares", common_english_name="Yellowfin Tuna",
                family_name="Scombridae", image_url=""),
        Species(scientific_name="Sardinops sagax", common_english_name=None,
                family_name="Clupeidae", image_url=""),
    ]
    session.add_all(rows)
    session.commit()
    return {s.scientific_name: s for s in rows}


@pytest.fixture()
def client(session_factory, species):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
