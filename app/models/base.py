"""
Base - ORM 共通定義
"""

import uuid

from app.database import Base


def generate_uuid() -> str:
    """主キー用 UUID 文字列を生成"""
    return str(uuid.uuid4())


__all__ = ["Base", "generate_uuid"]
