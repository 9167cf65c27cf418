"""
共通スキーマ
"""
from typing import List, Optional

from pydantic import Field

from .base import BaseSchema


class MessageResponse(BaseSchema):
    """メッセージレスポンス"""
    message: str


class SuccessResponse(BaseSchema):
    """処理結果レスポンス"""
    success: bool = Field(..., description="処理成功フラグ")
    message: str = Field(..., description="メッセージ")


class OrderEntry(BaseSchema):
    """並び替えの1要素"""
    id: str
    sort_order: int = Field(..., ge=0, description="表示順")


class ParentOrderEntry(OrderEntry):
    """親の付け替えを伴う並び替え"""
    parent_id: Optional[str] = Field(None, description="親ID（省略時は変更しない）")


def order_entries(entries: List[OrderEntry]) -> List[dict]:
    """並び替えリクエストをサービス層に渡す形式へ変換（未指定の項目は除外）"""
    return [entry.model_dump(exclude_unset=True) for entry in entries]
