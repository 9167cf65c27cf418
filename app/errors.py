"""
アプリケーション例外定義

サービス層から送出し、app.main の例外ハンドラで共通のJSON形式に変換する
"""

from typing import Any, Optional


class AppError(Exception):
    """アプリケーション例外の基底クラス"""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(AppError):
    status_code = 400
    error = "ValidationError"


class AuthenticationError(AppError):
    status_code = 401
    error = "AuthenticationError"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthorizationError(AppError):
    status_code = 403
    error = "AuthorizationError"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404
    error = "NotFoundError"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409
    error = "ConflictError"

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


class ServiceUnavailableError(AppError):
    """DB障害などインフラ起因のエラー（業務上の失敗とは区別する）"""

    status_code = 503
    error = "ServiceUnavailable"

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)
