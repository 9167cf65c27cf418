"""
セッションサービス
ログインセッションの発行・検証・失効を担当

クライアントにはセッションIDを含む署名付きJWTを渡し、
リクエスト毎にJWTの署名とセッション行の有効期限の両方を確認する
"""
import logging
from datetime import timedelta
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import settings
from app.models.session import UserSession
from app.models.user import User
from app.security import create_access_token, decode_access_token

logger = logging.getLogger(__name__)


class SessionService:
    """セッションサービスクラス"""

    def __init__(self, db: Session):
        self.db = db

    def create_session(
        self,
        user: User,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Tuple[UserSession, str]:
        """
        セッションを作成してアクセストークンを発行

        Returns:
            (セッション, アクセストークン)
        """
        lifetime = timedelta(days=settings.SESSION_EXPIRE_DAYS)
        session = UserSession(
            user_id=user.id,
            expires_at=utcnow() + lifetime,
            user_agent=user_agent[:500] if user_agent else None,
            ip_address=ip_address,
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)

        token = create_access_token(
            data={"sub": user.id, "sid": session.id},
            expires_delta=lifetime,
        )
        logger.info(f"セッション発行: user_id={user.id}, session_id={session.id}")
        return session, token

    def resolve(self, token: str) -> Optional[Tuple[User, UserSession]]:
        """
        アクセストークンからユーザーとセッションを解決

        署名不正・期限切れ・失効済みセッションの場合はNone
        """
        payload = decode_access_token(token)
        if not payload:
            return None

        user_id = payload.get("sub")
        session_id = payload.get("sid")
        if not user_id or not session_id:
            return None

        session = (
            self.db.query(UserSession)
            .filter(
                UserSession.id == session_id,
                UserSession.user_id == user_id,
                UserSession.expires_at > utcnow(),
            )
            .first()
        )
        if session is None:
            return None

        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            return None
        return user, session

    def revoke(self, session_id: str) -> bool:
        """セッションを失効（削除）"""
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.id == session_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def revoke_all_for_user(
        self,
        user_id: str,
        commit: bool = True,
        except_session_id: Optional[str] = None,
    ) -> int:
        """ユーザーの全セッションを失効（except_session_id のセッションは残す）"""
        query = self.db.query(UserSession).filter(UserSession.user_id == user_id)
        if except_session_id:
            query = query.filter(UserSession.id != except_session_id)
        deleted = query.delete(synchronize_session=False)
        if commit:
            self.db.commit()
        return deleted

    def cleanup_expired_sessions(self) -> int:
        """期限切れセッションを削除し、削除件数を返す"""
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= utcnow())
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info(f"期限切れセッション削除: {deleted}件")
        return deleted
