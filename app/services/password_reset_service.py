"""
パスワードリセットサービス

トークンの発行・検証・使用・期限切れ削除を担当する

- 発行時はユーザーの既存トークンをすべて使用済みにしてから新規作成する
- トークンは1回限り有効、有効期限は発行時刻からの固定時間
- 「存在しない」「期限切れ」「使用済み」は同じメッセージで返し、状態を漏らさない
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import settings
from app.errors import ServiceUnavailableError
from app.models.password_reset_token import PasswordResetToken
from app.security import hash_password
from app.services.email import build_reset_url, send_password_reset_email
from app.services.session_service import SessionService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

REQUEST_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)
INVALID_TOKEN_MESSAGE = "Invalid or expired reset token."
VALID_TOKEN_MESSAGE = "Token is valid."
RESET_SUCCESS_MESSAGE = "Password has been reset successfully."

# 32バイト = 256bit のエントロピー（hex 64文字）
TOKEN_BYTES = 32


@dataclass(frozen=True)
class ResetResult:
    """リセット要求・実行の結果"""
    success: bool
    message: str


@dataclass(frozen=True)
class VerifyResult:
    """トークン検証の結果"""
    valid: bool
    message: str


Notifier = Callable[[str, str], bool]


class PasswordResetService:
    """パスワードリセットサービスクラス"""

    def __init__(
        self,
        db: Session,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.notifier = notifier or send_password_reset_email
        self.clock = clock
        self.users = UserService(db)

    @staticmethod
    def generate_token() -> str:
        """推測不可能なリセットトークンを生成"""
        return secrets.token_hex(TOKEN_BYTES)

    def request_reset(self, email: str) -> ResetResult:
        """
        パスワードリセットを要求

        メールアドレスが未登録でも同じレスポンスを返す（アカウント列挙防止）
        """
        try:
            user = self.users.get_user_by_email(email)
            if not user:
                logger.info("パスワードリセット: 未登録のメールアドレス")
                return ResetResult(success=True, message=REQUEST_MESSAGE)

            token = self.generate_token()
            expires_at = self.clock() + timedelta(
                minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES
            )

            # 既存トークンの無効化と新規作成を1トランザクションで行う
            self.db.execute(
                update(PasswordResetToken)
                .where(PasswordResetToken.user_id == user.id)
                .values(used=True)
            )
            self.db.add(
                PasswordResetToken(
                    user_id=user.id,
                    token=token,
                    expires_at=expires_at,
                    used=False,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"パスワードリセットトークン作成エラー: {e}")
            raise ServiceUnavailableError("Failed to create password reset token")

        logger.info(f"パスワードリセットトークン発行: user_id={user.id}")
        self._dispatch(user.email, token)
        return ResetResult(success=True, message=REQUEST_MESSAGE)

    def _dispatch(self, email: str, token: str) -> None:
        """リセットリンクを送信（失敗しても要求自体は成功扱い）"""
        try:
            sent = self.notifier(email, build_reset_url(token))
        except Exception as e:
            logger.error(f"パスワードリセットメール送信失敗: {email}, error={e}")
            return
        if not sent:
            logger.error(f"パスワードリセットメール送信失敗: {email}")

    def _find_active_token(self, token: str) -> Optional[PasswordResetToken]:
        return (
            self.db.query(PasswordResetToken)
            .filter(
                PasswordResetToken.token == token,
                PasswordResetToken.used.is_(False),
                PasswordResetToken.expires_at > self.clock(),
            )
            .first()
        )

    def verify_token(self, token: str) -> VerifyResult:
        """トークンの有効性を確認（読み取りのみ、トークンは消費しない）"""
        try:
            record = self._find_active_token(token)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"リセットトークン検証エラー: {e}")
            raise ServiceUnavailableError("Failed to verify reset token")

        if record is None:
            return VerifyResult(valid=False, message=INVALID_TOKEN_MESSAGE)
        return VerifyResult(valid=True, message=VALID_TOKEN_MESSAGE)

    def reset_password(self, token: str, new_password: str) -> ResetResult:
        """
        トークンを使用してパスワードを再設定

        条件付きUPDATEでトークンを確保するため、同じトークンで同時に呼ばれても
        成功するのは1回だけ。パスワード更新とトークン使用済み化は同一トランザクション
        """
        now = self.clock()
        try:
            record = self._find_active_token(token)
            if record is None:
                return ResetResult(success=False, message=INVALID_TOKEN_MESSAGE)

            claimed = self.db.execute(
                update(PasswordResetToken)
                .where(
                    PasswordResetToken.id == record.id,
                    PasswordResetToken.used.is_(False),
                    PasswordResetToken.expires_at > now,
                )
                .values(used=True)
                .execution_options(synchronize_session=False)
            )
            if claimed.rowcount != 1:
                # 他のリクエストが先に使用した
                self.db.rollback()
                return ResetResult(success=False, message=INVALID_TOKEN_MESSAGE)

            user = self.users.get_user_by_id(record.user_id)
            if user is None:
                self.db.rollback()
                return ResetResult(success=False, message=INVALID_TOKEN_MESSAGE)

            user.password_hash = hash_password(new_password)
            user.updated_at = now
            # 既存のログインセッションはすべて失効させる
            SessionService(self.db).revoke_all_for_user(user.id, commit=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"パスワードリセットエラー: {e}")
            raise ServiceUnavailableError("Failed to reset password")

        logger.info(f"パスワードリセット完了: user_id={user.id}")
        return ResetResult(success=True, message=RESET_SUCCESS_MESSAGE)

    def cleanup_expired_tokens(self) -> int:
        """
        期限切れトークンを削除（使用済みかどうかは問わない）

        定期実行は外部（cron等）に任せる。削除件数を返す
        """
        try:
            deleted = (
                self.db.query(PasswordResetToken)
                .filter(PasswordResetToken.expires_at <= self.clock())
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"期限切れトークン削除エラー: {e}")
            raise ServiceUnavailableError("Failed to clean up expired tokens")

        if deleted:
            logger.info(f"期限切れリセットトークン削除: {deleted}件")
        return deleted
