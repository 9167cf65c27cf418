"""
Day Tracker API スキーマ定義（ボード・タスク・日記）
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .base import BaseSchema
from .common import OrderEntry

TaskStatus = Literal["todo", "in-progress", "done"]
TaskPriority = Literal["low", "medium", "high", "urgent"]
HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


# ============================================
# ボード
# ============================================
class BoardCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255, description="ボード名")
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR, description="HEXカラー")
    sort_order: int = Field(0, ge=0)


class BoardUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    sort_order: Optional[int] = Field(None, ge=0)


class BoardResponse(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    is_archived: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class BoardEnvelope(BaseSchema):
    board: BoardResponse


class BoardListResponse(BaseSchema):
    boards: List[BoardResponse]


class BoardReorderRequest(BaseSchema):
    board_orders: List[OrderEntry]


# ============================================
# タスク
# ============================================
class TaskCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=255, description="タスク名")
    description: Optional[str] = None
    board_id: Optional[str] = Field(None, description="ボードID（省略時は受信箱）")
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None
    sort_order: int = Field(0, ge=0)
    tags: Optional[List[str]] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    actual_minutes: Optional[int] = Field(None, ge=0)


class TaskUpdate(BaseSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    board_id: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    sort_order: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    actual_minutes: Optional[int] = Field(None, ge=0)


class TaskResponse(BaseSchema):
    id: str
    board_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    sort_order: int
    tags: Optional[List[str]] = None
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class TaskEnvelope(BaseSchema):
    task: TaskResponse


class TaskListResponse(BaseSchema):
    tasks: List[TaskResponse]


class TaskOrderEntry(OrderEntry):
    board_id: Optional[str] = None


class TaskReorderRequest(BaseSchema):
    task_orders: List[TaskOrderEntry]


# ============================================
# 日記
# ============================================
class JournalCreate(BaseSchema):
    date: datetime = Field(..., description="日付")
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    mood: Optional[str] = Field(None, max_length=20)
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    productivity_score: Optional[int] = Field(None, ge=1, le=10)
    tags: Optional[List[str]] = None
    weather: Optional[str] = Field(None, max_length=50)
    gratitude: Optional[str] = None
    goals: Optional[str] = None
    reflections: Optional[str] = None


class JournalUpdate(BaseSchema):
    date: Optional[datetime] = None
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    mood: Optional[str] = Field(None, max_length=20)
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    productivity_score: Optional[int] = Field(None, ge=1, le=10)
    tags: Optional[List[str]] = None
    weather: Optional[str] = Field(None, max_length=50)
    gratitude: Optional[str] = None
    goals: Optional[str] = None
    reflections: Optional[str] = None


class JournalResponse(BaseSchema):
    id: str
    date: datetime
    title: Optional[str] = None
    content: Optional[str] = None
    mood: Optional[str] = None
    energy_level: Optional[int] = None
    productivity_score: Optional[int] = None
    tags: Optional[List[str]] = None
    weather: Optional[str] = None
    gratitude: Optional[str] = None
    goals: Optional[str] = None
    reflections: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class JournalEnvelope(BaseSchema):
    journal: JournalResponse


class JournalListResponse(BaseSchema):
    journals: List[JournalResponse]


class JournalStats(BaseSchema):
    total_entries: int
    average_energy_level: Optional[float] = None
    average_productivity_score: Optional[float] = None
    most_common_mood: Optional[str] = None


class JournalStatsResponse(BaseSchema):
    stats: JournalStats
