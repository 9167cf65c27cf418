"""
Vault API スキーマ定義

encrypted_data はクライアントで暗号化済みの文字列をそのまま受け渡す
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import BaseSchema
from .common import OrderEntry
from .day_tracker import HEX_COLOR


# ============================================
# カテゴリ
# ============================================
class VaultCategoryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    sort_order: int = Field(0, ge=0)


class VaultCategoryUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    sort_order: Optional[int] = Field(None, ge=0)


class VaultCategoryResponse(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_archived: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class VaultCategoryEnvelope(BaseSchema):
    category: VaultCategoryResponse


class VaultCategoryListResponse(BaseSchema):
    categories: List[VaultCategoryResponse]


class VaultCategoryReorderRequest(BaseSchema):
    category_orders: List[OrderEntry]


# ============================================
# アイテム
# ============================================
class VaultItemCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field("password", max_length=50, description="password / note / card / identity")
    category_id: Optional[str] = None
    website: Optional[str] = Field(None, max_length=500)
    username: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    encrypted_data: Optional[str] = Field(None, description="クライアント側で暗号化済みのデータ")
    encryption_key_id: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    is_favorite: bool = False
    expires_at: Optional[datetime] = None


class VaultItemUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=50)
    category_id: Optional[str] = None
    website: Optional[str] = Field(None, max_length=500)
    username: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    encrypted_data: Optional[str] = None
    encryption_key_id: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    is_favorite: Optional[bool] = None
    expires_at: Optional[datetime] = None


class VaultItemResponse(BaseSchema):
    id: str
    category_id: Optional[str] = None
    name: str
    type: str
    website: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    encrypted_data: Optional[str] = None
    encryption_key_id: Optional[str] = None
    notes: Optional[str] = None
    is_favorite: bool
    is_archived: bool
    access_count: int
    last_accessed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class VaultItemEnvelope(BaseSchema):
    item: VaultItemResponse


class VaultItemListResponse(BaseSchema):
    items: List[VaultItemResponse]


class AccessLogEntry(BaseSchema):
    id: str
    action: str
    success: bool
    failure_reason: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


class AccessLogResponse(BaseSchema):
    access_log: List[AccessLogEntry]
