"""
ユーザーサービス
ユーザーの検索・作成・更新・削除を担当（認証・パスワードリセットから利用）
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.errors import ConflictError
from app.models.user import User
from app.security import hash_password
from app.services.session_service import SessionService

logger = logging.getLogger(__name__)


class UserService:
    """ユーザーサービスクラス"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """IDでユーザーを取得"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        """メールアドレスでユーザーを取得（保存値との完全一致）"""
        return self.db.query(User).filter(User.email == email).first()

    def create_user(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """ユーザーを作成（メール重複時はConflictError）"""
        if self.get_user_by_email(email):
            raise ConflictError("An account with this email already exists")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # 同時登録による一意制約違反
            self.db.rollback()
            raise ConflictError("An account with this email already exists")
        self.db.refresh(user)

        logger.info(f"ユーザー登録: user_id={user.id}")
        return user

    def update_profile(
        self,
        user: User,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """プロフィール（氏名）を更新"""
        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name
        user.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_password(
        self, user: User, new_password: str, keep_session_id: Optional[str] = None
    ) -> User:
        """
        パスワードハッシュを更新し、keep_session_id 以外のセッションを失効

        ハッシュ更新とセッション失効は同一トランザクション
        """
        user.password_hash = hash_password(new_password)
        user.updated_at = utcnow()
        try:
            SessionService(self.db).revoke_all_for_user(
                user.id, commit=False, except_session_id=keep_session_id
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def delete_user(self, user: User) -> None:
        """ユーザーを削除（関連データはCASCADEで削除）"""
        user_id = user.id
        self.db.delete(user)
        self.db.commit()
        logger.info(f"ユーザー削除: user_id={user_id}")
