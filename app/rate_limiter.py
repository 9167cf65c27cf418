"""
レート制限設定
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

# レート制限インスタンス（RATE_LIMIT_ENABLED=false で無効化）
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
