"""Application configuration"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    PROJECT_NAME: str = "LifeLog"
    VERSION: str = "1.0.0"
    ENV: str = "development"
    DEBUG: bool = True

    # database
    DATABASE_URL: str = "sqlite:///./lifelog.db"
    SQL_ECHO: bool = False

    # 認証・セッション
    SECRET_KEY: str = _DEFAULT_SECRET_KEY
    JWT_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12

    # パスワードリセット
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60

    # Frontend
    FRONTEND_URL: str = "http://localhost:5173"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    # Email
    RESEND_API_KEY: str = ""
    RESEND_FROM_EMAIL: str = "LifeLog <onboarding@resend.dev>"

    # レート制限
    RATE_LIMIT_ENABLED: bool = True
    FORGOT_PASSWORD_RATE_LIMIT: str = "5/5minutes"

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


settings = Settings()


def validate_settings() -> None:
    """
    本番環境向けの設定検証

    開発・テスト環境では最小限の環境変数で起動できるよう、本番のみ厳格にチェックする
    """
    if not settings.is_production:
        return

    errors: list[str] = []

    if not settings.SECRET_KEY or settings.SECRET_KEY == _DEFAULT_SECRET_KEY:
        errors.append("SECRET_KEY must be set to a secure value in production")

    if not settings.RESEND_API_KEY:
        errors.append("RESEND_API_KEY must be set in production")

    if not settings.FRONTEND_URL.startswith(("http://", "https://")):
        errors.append("FRONTEND_URL must be an http(s) URL in production")

    if errors:
        raise RuntimeError("Invalid configuration:\n- " + "\n- ".join(errors))
