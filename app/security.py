"""
パスワードハッシュ・アクセストークン関連のユーティリティ
"""

from datetime import timedelta
from typing import Optional
import bcrypt
import jwt

from app.clock import utcnow
from app.config import settings


# パスワードハッシュ化
def hash_password(password: str) -> str:
    """パスワードをハッシュ化（bcrypt, コストはBCRYPT_ROUNDS）"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, hashed_password: str) -> bool:
    """パスワード検証"""
    try:
        return bcrypt.checkpw(password.encode(), hashed_password.encode())
    except ValueError:
        # 不正なハッシュ形式
        return False


# JWTトークン生成
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """アクセストークン生成"""
    to_encode = data.copy()
    if expires_delta:
        expire = utcnow() + expires_delta
    else:
        expire = utcnow() + timedelta(days=settings.SESSION_EXPIRE_DAYS)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """アクセストークンを検証してペイロードを返す（不正な場合はNone）"""
    try:
        return jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.InvalidTokenError:
        return None
