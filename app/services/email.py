"""
Email Service - Resendを使用したメール送信
"""

import logging
import resend

from app.config import settings

logger = logging.getLogger(__name__)


def _configure() -> bool:
    """Resend APIキーを設定し、送信可能かどうかを返す"""
    if not settings.RESEND_API_KEY:
        return False
    resend.api_key = settings.RESEND_API_KEY
    return True


def build_reset_url(token: str) -> str:
    """フロントエンドのパスワード再設定ページURLを生成"""
    return f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"


def send_password_reset_email(to_email: str, reset_url: str) -> bool:
    """
    パスワードリセットメールを送信

    Args:
        to_email: 送信先メールアドレス
        reset_url: パスワードリセットURL

    Returns:
        送信成功時はTrue、失敗時はFalse
    """
    if not _configure():
        logger.warning("RESEND_API_KEY が設定されていないため、リセットメールを送信できません")
        return False

    try:
        params: resend.Emails.SendParams = {
            "from": settings.RESEND_FROM_EMAIL,
            "to": [to_email],
            "subject": "[LifeLog] Reset your password",
            "html": f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #0078d4;">Password reset</h2>
        <p>We received a request to reset the password for your LifeLog account.</p>
        <p>Click the button below to choose a new password.</p>
        <p style="margin: 30px 0;">
            <a href="{reset_url}"
               style="background-color: #0078d4; color: white; padding: 12px 24px;
                      text-decoration: none; border-radius: 8px; display: inline-block;">
                Reset password
            </a>
        </p>
        <p style="color: #666; font-size: 14px;">
            This link expires in {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes and can be used once.
        </p>
        <p style="color: #666; font-size: 14px;">
            If you did not request this, you can ignore this email.
        </p>
    </div>
</body>
</html>
            """,
        }

        result = resend.Emails.send(params)
        logger.info(f"パスワードリセットメール送信成功: {to_email}, id={result.get('id')}")
        return True

    except Exception as e:
        logger.error(f"パスワードリセットメール送信エラー: {to_email}, error={e}")
        return False
