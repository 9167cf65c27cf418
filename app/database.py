from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv
import logging

load_dotenv()

from app.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is not set")

engine_options = {
    "pool_pre_ping": True,
    "echo": settings.SQL_ECHO,
}

if DATABASE_URL.startswith("sqlite"):
    # SQLite はスレッド間でコネクションを共有するため
    engine_options["connect_args"] = {"check_same_thread": False}
else:
    engine_options.update(
        pool_size=5,  # 同時接続
        max_overflow=10,  # プールがいっぱいの時の追加接続
        pool_recycle=3600,  # 1時間で接続をリサイクル
    )

engine = create_engine(DATABASE_URL, **engine_options)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite では外部キー制約(ON DELETE CASCADE)を明示的に有効化する"""
    if engine.dialect.name == "sqlite":
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# セッションファクトリー
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Base Class for ORM models
class Base(DeclarativeBase):
    pass


# 依存性注入用のジェネレータ
def get_db():
    """
    FastAPIの依存性注入で使用するDBセッション

    使用例:
        from sqlalchemy.orm import Session
        from app.database import get_db

        @router.get("/boards")
        def list_boards(db: Session = Depends(get_db)):
            return db.query(Board).all()
    """

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection(bind=None) -> bool:
    """データベース接続確認（ヘルスチェック用）"""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
