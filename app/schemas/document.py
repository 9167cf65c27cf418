"""
Document Hub API スキーマ定義
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import BaseSchema
from .common import ParentOrderEntry
from .day_tracker import HEX_COLOR


# ============================================
# カテゴリ
# ============================================
class DocumentCategoryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    sort_order: int = Field(0, ge=0)


class DocumentCategoryUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    sort_order: Optional[int] = Field(None, ge=0)


class DocumentCategoryResponse(BaseSchema):
    id: str
    parent_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_archived: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class DocumentCategoryEnvelope(BaseSchema):
    category: DocumentCategoryResponse


class DocumentCategoryListResponse(BaseSchema):
    categories: List[DocumentCategoryResponse]


class DocumentCategoryReorderRequest(BaseSchema):
    category_orders: List[ParentOrderEntry]


# ============================================
# ドキュメント
# ============================================
class DocumentCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: Optional[str] = None
    file_name: Optional[str] = Field(None, max_length=255)
    file_size: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = Field(None, max_length=100)
    storage_path: Optional[str] = Field(None, max_length=1000, description="ファイルの保存先")
    document_type: Optional[str] = Field(None, max_length=50)
    extracted_text: Optional[str] = None
    searchable_content: Optional[str] = None
    is_favorite: bool = False
    is_important: bool = False
    expiration_date: Optional[datetime] = None


class DocumentUpdate(BaseSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: Optional[str] = None
    file_name: Optional[str] = Field(None, max_length=255)
    file_size: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = Field(None, max_length=100)
    storage_path: Optional[str] = Field(None, max_length=1000)
    document_type: Optional[str] = Field(None, max_length=50)
    extracted_text: Optional[str] = None
    searchable_content: Optional[str] = None
    is_favorite: Optional[bool] = None
    is_important: Optional[bool] = None
    expiration_date: Optional[datetime] = None


class DocumentResponse(BaseSchema):
    id: str
    category_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    storage_path: Optional[str] = None
    document_type: Optional[str] = None
    version: int
    is_favorite: bool
    is_important: bool
    is_archived: bool
    view_count: int
    download_count: int
    last_accessed_at: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class DocumentEnvelope(BaseSchema):
    document: DocumentResponse


class DocumentListResponse(BaseSchema):
    documents: List[DocumentResponse]


class DownloadResponse(BaseSchema):
    """ダウンロード情報（ファイル本体は保存先から取得する）"""
    storage_path: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    download_count: int
