"""
定期クリーンアップバッチ

期限切れのリセットトークン・セッションの削除と、延滞貸出の検出を行う。
スケジューラは持たず、cron などから app.scripts.run_cleanup を呼び出す
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.services.lending_service import LendingService
from app.services.password_reset_service import PasswordResetService
from app.services.session_service import SessionService

logger = logging.getLogger(__name__)


class CleanupBatchProcessor:
    """クリーンアップバッチ処理クラス"""

    def __init__(self, db: Session):
        self.db = db

    def run(self) -> Dict[str, Any]:
        logger.info("クリーンアップバッチ処理を開始")
        start_time = datetime.now()

        expired_tokens = PasswordResetService(self.db).cleanup_expired_tokens()
        expired_sessions = SessionService(self.db).cleanup_expired_sessions()
        overdue_lendings = LendingService(self.db).check_overdue()

        end_time = datetime.now()
        result = {
            "status": "completed",
            "start_time": start_time.isoformat(),
            "end_time": end_time.isoformat(),
            "duration_seconds": (end_time - start_time).total_seconds(),
            "expired_tokens": expired_tokens,
            "expired_sessions": expired_sessions,
            "overdue_lendings": len(overdue_lendings),
        }

        logger.info(
            f"クリーンアップ完了: tokens={expired_tokens}, sessions={expired_sessions}, "
            f"overdue={result['overdue_lendings']}"
        )
        return result


def run_cleanup_batch(db: Optional[Session] = None) -> Dict[str, Any]:
    """バッチ処理を実行するエントリーポイント"""
    if db is not None:
        return CleanupBatchProcessor(db).run()

    db = SessionLocal()
    try:
        return CleanupBatchProcessor(db).run()
    finally:
        db.close()
