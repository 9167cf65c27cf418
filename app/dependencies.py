"""依存注入モジュール"""
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.session import UserSession
from app.models.user import User
from app.services.session_service import SessionService

# ヘッダーが無い場合も 401 を返すため auto_error は無効にする
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Tuple[User, UserSession]:
    """
    Authorizationヘッダーのトークンからユーザーとセッションを取得

    トークンが無い・不正・セッションが失効済みの場合は 401
    """
    if credentials is None:
        raise _unauthorized("Authentication required")

    resolved = SessionService(db).resolve(credentials.credentials)
    if resolved is None:
        raise _unauthorized("Invalid or expired session")
    return resolved


def get_current_user(auth: Tuple[User, UserSession] = Depends(get_current_auth)) -> User:
    """現在のユーザーを取得"""
    return auth[0]


def get_current_session(
    auth: Tuple[User, UserSession] = Depends(get_current_auth),
) -> UserSession:
    """現在のセッションを取得"""
    return auth[1]


def get_client_ip(request: Request) -> Optional[str]:
    """クライアントIP（プロキシ経由の場合は X-Forwarded-For の先頭）"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
