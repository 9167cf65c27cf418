"""
Knowledge Base API スキーマ定義（ノートブック・ノート・タグ）
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import BaseSchema
from .common import ParentOrderEntry
from .day_tracker import HEX_COLOR


# ============================================
# ノートブック
# ============================================
class NotebookCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = Field(None, description="親ノートブックID")
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    sort_order: int = Field(0, ge=0)


class NotebookUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    sort_order: Optional[int] = Field(None, ge=0)


class NotebookResponse(BaseSchema):
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


class NotebookEnvelope(BaseSchema):
    notebook: NotebookResponse


class NotebookListResponse(BaseSchema):
    notebooks: List[NotebookResponse]


class NotebookReorderRequest(BaseSchema):
    notebook_orders: List[ParentOrderEntry]


# ============================================
# タグ
# ============================================
class TagCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    description: Optional[str] = None


class TagUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    description: Optional[str] = None


class TagResponse(BaseSchema):
    id: str
    name: str
    color: Optional[str] = None
    description: Optional[str] = None
    usage_count: int
    created_at: datetime
    updated_at: datetime


class TagEnvelope(BaseSchema):
    tag: TagResponse


class TagListResponse(BaseSchema):
    tags: List[TagResponse]


# ============================================
# ノート
# ============================================
class NoteCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    notebook_id: Optional[str] = None
    is_favorite: bool = False
    is_pinned: bool = False
    tags: Optional[List[str]] = Field(None, description="タグ名のリスト")


class NoteUpdate(BaseSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    notebook_id: Optional[str] = None
    is_favorite: Optional[bool] = None
    is_pinned: Optional[bool] = None
    tags: Optional[List[str]] = Field(None, description="指定した場合はタグを置き換える")


class NoteTagSummary(BaseSchema):
    id: str
    name: str
    color: Optional[str] = None


class NoteResponse(BaseSchema):
    id: str
    notebook_id: Optional[str] = None
    title: str
    content: Optional[str] = None
    excerpt: Optional[str] = None
    is_favorite: bool
    is_pinned: bool
    is_archived: bool
    word_count: int
    reading_time: int
    view_count: int
    last_viewed_at: Optional[datetime] = None
    tags: List[NoteTagSummary] = []
    created_at: datetime
    updated_at: datetime


class NoteEnvelope(BaseSchema):
    note: NoteResponse


class NoteListResponse(BaseSchema):
    notes: List[NoteResponse]
