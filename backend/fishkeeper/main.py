from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
import os

from fishkeeper.api.routers import catalog, fish
from fishkeeper.db import SessionLocal, init_db
from fishkeeper.errors import CatalogError
from fishkeeper.logging_setup import get_logger, setup_logging
from fishkeeper.services.catalog.loader import BUNDLED_CATALOG, load_catalog_file, seed_catalog

logger = get_logger(__name__)

app = FastAPI(title="Fisherman's Keeper API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True}


def seed_from_env() -> int:
    path = Path(os.getenv("FISHKEEPER_CATALOG_PATH") or BUNDLED_CATALOG)
    try:
        entries = load_catalog_file(path)
    except CatalogError:
        # カタログが読めなくても保存済み一覧は使える
        logger.warning("catalog not loaded from %s", path, exc_info=True)
        return 0
    db = SessionLocal()
    try:
        return seed_catalog(db, entries)
    finally:
        db.close()


# 初回起動時にDBスキーマを作成し、カタログを投入
@app.on_event("startup")
def on_startup():
    setup_logging()
    init_db()
    seed_from_env()


app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
app.include_router(fish.router,    prefix="/fish",    tags=["fish"])
