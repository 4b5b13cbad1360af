from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from pathlib import Path
import os

from fishkeeper.logging_setup import get_logger
# モデル定義側の Base（fishkeeper.models.base）を利用してメタデータを統一
from fishkeeper.models.base import Base

logger = get_logger(__name__)

# 1) DATABASE_URL が指定されていれば優先（例: postgresql+psycopg://...）
# 2) それ以外は端末内の SQLite を使用
_database_url_env = os.getenv("DATABASE_URL")
if _database_url_env:
    SQLALCHEMY_DATABASE_URL = _database_url_env
    _is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")
else:
    _container_data = Path("/app/data")
    if _container_data.exists():
        db_path = _container_data / "fishkeeper.db"
    else:
        # backend/fishkeeper/db.py → ../../.. = <repo root>
        repo_root = Path(__file__).resolve().parents[2]
        db_path = repo_root / "data" / "fishkeeper.db"
    db_path.parent.mkdir(parents=True, exist_ok=True)
    SQLALCHEMY_DATABASE_URL = f"sqlite:///{db_path}"
    _is_sqlite = True

_connect_args = {"check_same_thread": False} if _is_sqlite else {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    # 各モデルモジュールを明示 import してメタデータ登録を確実化
    import fishkeeper.models.species  # noqa: F401
    import fishkeeper.models.saved_fish  # noqa: F401
    eng = bind or engine
    Base.metadata.create_all(bind=eng)

    # SQLite 簡易マイグレーション（既存DBの不足カラムを追加）
    if eng.dialect.name == "sqlite":
        try:
            with eng.connect() as conn:
                cols = conn.exec_driver_sql("PRAGMA table_info(saved_fish)").fetchall()
                names = {row[1] for row in cols}
                # 任意項目カラムが無い既存 DB にも追加する
                for col in ("title", "note"):
                    if col not in names:
                        conn.exec_driver_sql(f"ALTER TABLE saved_fish ADD COLUMN {col} VARCHAR")
                        logger.info("added column saved_fish.%s", col)
                conn.commit()
        except Exception:
            # 失敗しても起動は続行
            logger.warning("sqlite additive migration failed", exc_info=True)


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
