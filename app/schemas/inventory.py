"""
Inventory API スキーマ定義（保管場所・持ち物・貸出）
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field

from .base import BaseSchema
from .common import ParentOrderEntry

LendingStatus = Literal["active", "returned", "overdue", "lost"]


# ============================================
# 保管場所
# ============================================
class LocationCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    location_type: Optional[str] = Field(None, max_length=50, description="room / shelf / box など")
    address: Optional[str] = Field(None, max_length=500)
    sort_order: int = Field(0, ge=0)


class LocationUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    location_type: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    sort_order: Optional[int] = Field(None, ge=0)


class LocationResponse(BaseSchema):
    id: str
    parent_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    location_type: Optional[str] = None
    address: Optional[str] = None
    is_archived: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class LocationEnvelope(BaseSchema):
    location: LocationResponse


class LocationListResponse(BaseSchema):
    locations: List[LocationResponse]


class LocationReorderRequest(BaseSchema):
    location_orders: List[ParentOrderEntry]


# ============================================
# 持ち物
# ============================================
class ItemCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    location_id: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    barcode: Optional[str] = Field(None, max_length=100)
    custom_id: Optional[str] = Field(None, max_length=100)
    purchase_date: Optional[datetime] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    condition: Optional[str] = Field(None, max_length=50)
    warranty_expires_at: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    search_keywords: Optional[str] = None
    is_favorite: bool = False


class ItemUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    location_id: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    barcode: Optional[str] = Field(None, max_length=100)
    custom_id: Optional[str] = Field(None, max_length=100)
    purchase_date: Optional[datetime] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    condition: Optional[str] = Field(None, max_length=50)
    warranty_expires_at: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    search_keywords: Optional[str] = None
    is_favorite: Optional[bool] = None


class ItemResponse(BaseSchema):
    id: str
    location_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    barcode: Optional[str] = None
    custom_id: Optional[str] = None
    purchase_date: Optional[datetime] = None
    purchase_price: Optional[float] = None
    current_value: Optional[float] = None
    condition: Optional[str] = None
    warranty_expires_at: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    search_keywords: Optional[str] = None
    is_favorite: bool
    is_lost: bool
    is_broken: bool
    is_lent: bool
    is_archived: bool
    last_used_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ItemEnvelope(BaseSchema):
    item: ItemResponse


class ItemListResponse(BaseSchema):
    items: List[ItemResponse]


class ItemMoveRequest(BaseSchema):
    location_id: Optional[str] = Field(None, description="移動先（nullで未割り当て）")
    reason: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class LocationHistoryEntry(BaseSchema):
    id: str
    from_location_id: Optional[str] = None
    to_location_id: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    moved_by: Optional[str] = None
    moved_date: datetime


class LocationHistoryResponse(BaseSchema):
    history: List[LocationHistoryEntry]


class MaintenanceCreate(BaseSchema):
    maintenance_type: str = Field(..., min_length=1, max_length=50, description="cleaning / repair / inspection など")
    description: Optional[str] = None
    cost: Optional[float] = Field(None, ge=0)
    performed_by: Optional[str] = Field(None, max_length=255)
    performed_at: Optional[datetime] = None
    next_due_date: Optional[datetime] = None


class MaintenanceResponse(BaseSchema):
    id: str
    item_id: str
    maintenance_type: str
    description: Optional[str] = None
    cost: Optional[float] = None
    performed_by: Optional[str] = None
    performed_at: datetime
    next_due_date: Optional[datetime] = None
    created_at: datetime


class MaintenanceEnvelope(BaseSchema):
    maintenance: MaintenanceResponse


class MaintenanceListResponse(BaseSchema):
    maintenance: List[MaintenanceResponse]


# ============================================
# 貸出
# ============================================
class LendingCreate(BaseSchema):
    item_id: str
    borrower_name: str = Field(..., min_length=1, max_length=255)
    borrower_email: Optional[EmailStr] = None
    borrower_phone: Optional[str] = Field(None, max_length=50)
    purpose: Optional[str] = None
    lent_date: Optional[datetime] = None
    expected_return_date: Optional[datetime] = None
    condition_when_lent: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class LendingUpdate(BaseSchema):
    borrower_name: Optional[str] = Field(None, min_length=1, max_length=255)
    borrower_email: Optional[EmailStr] = None
    borrower_phone: Optional[str] = Field(None, max_length=50)
    purpose: Optional[str] = None
    expected_return_date: Optional[datetime] = None
    condition_when_lent: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class LendingReturnRequest(BaseSchema):
    condition_when_returned: Optional[str] = Field(None, max_length=50)
    damage_notes: Optional[str] = None


class LendingResponse(BaseSchema):
    id: str
    item_id: str
    borrower_name: str
    borrower_email: Optional[str] = None
    borrower_phone: Optional[str] = None
    purpose: Optional[str] = None
    lent_date: datetime
    expected_return_date: Optional[datetime] = None
    actual_return_date: Optional[datetime] = None
    status: str
    is_overdue: bool
    condition_when_lent: Optional[str] = None
    condition_when_returned: Optional[str] = None
    damage_notes: Optional[str] = None
    reminder_sent: bool
    last_reminder_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class LendingEnvelope(BaseSchema):
    lending: LendingResponse


class LendingListResponse(BaseSchema):
    lendings: List[LendingResponse]


class LendingStats(BaseSchema):
    total: int
    active: int
    overdue: int
    returned: int
    lost: int


class LendingStatsResponse(BaseSchema):
    stats: LendingStats
