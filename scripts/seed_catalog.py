# scripts/seed_catalog.py
# 使い方: python scripts/seed_catalog.py [catalog.json]
import sys
from pathlib import Path

from fishkeeper.db import SessionLocal, init_db
from fishkeeper.services.catalog.loader import BUNDLED_CATALOG, load_catalog_file, seed_catalog

path = Path(sys.argv[1]) if len(sys.argv) > 1 else BUNDLED_CATALOG
init_db()
db = SessionLocal()
try:
    added = seed_catalog(db, load_catalog_file(path))
finally:
    db.close()
print(path, "->", added, "species added")
