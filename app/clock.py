"""
時刻ユーティリティ

有効期限の書き込みと比較で同じ時計を使うため、UTC の naive datetime に統一する
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """現在時刻（UTC, tzinfoなし）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
