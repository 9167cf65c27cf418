"""
認証・ユーザー API スキーマ定義
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .base import BaseSchema

PASSWORD_MIN_LENGTH = 8
# bcrypt が扱えるのは先頭72バイトまで
PASSWORD_MAX_BYTES = 72


def validate_password_strength(password: str) -> str:
    """
    パスワード強度チェック

    - 8文字以上、UTF-8で72バイト以内
    - 英大文字・英小文字・数字をそれぞれ1文字以上
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        raise ValueError("Password must contain at least one number")
    return password


# ============================================
# リクエストスキーマ
# ============================================
class SignupRequest(BaseSchema):
    """ユーザー登録リクエスト"""
    email: EmailStr
    password: str = Field(..., max_length=128)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_strength(v)


class SigninRequest(BaseSchema):
    """ログインリクエスト"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseSchema):
    """パスワードリセット要求"""
    email: EmailStr


class ResetPasswordRequest(BaseSchema):
    """パスワードリセット実行"""
    token: str = Field(..., min_length=1, max_length=255)
    new_password: str = Field(..., max_length=128)

    @field_validator("new_password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_strength(v)


class ProfileUpdateRequest(BaseSchema):
    """プロフィール更新リクエスト"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class PasswordChangeRequest(BaseSchema):
    """パスワード変更リクエスト"""
    current_password: str = Field(..., min_length=1, description="現在のパスワード")
    new_password: str = Field(..., max_length=128, description="新しいパスワード")

    @field_validator("new_password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_strength(v)


# ============================================
# レスポンススキーマ
# ============================================
class UserResponse(BaseSchema):
    """ユーザー情報（パスワードハッシュは含めない）"""
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SessionResponse(BaseSchema):
    """ログインセッション情報"""
    id: str
    expires_at: datetime
    created_at: datetime


class AuthResponse(BaseSchema):
    """登録・ログインレスポンス"""
    success: bool
    message: str
    token: str
    user: UserResponse
    session: SessionResponse


class MeResponse(BaseSchema):
    """ログインユーザー情報"""
    user: UserResponse
    session: SessionResponse


class ProfileResponse(BaseSchema):
    """プロフィールレスポンス"""
    user: UserResponse
