"""
Item API エンドポイント（持ち物の管理）
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.inventory import (
    ItemCreate,
    ItemEnvelope,
    ItemListResponse,
    ItemMoveRequest,
    ItemUpdate,
    LocationHistoryResponse,
    MaintenanceCreate,
    MaintenanceEnvelope,
    MaintenanceListResponse,
)
from app.services.item_service import ItemService

router = APIRouter(prefix="/api/items", tags=["Inventory"])


@router.get("", response_model=ItemListResponse)
def list_items(
    location_id: Optional[str] = Query(None, alias="locationId"),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="名前・説明・ブランド・型番・キーワードの部分一致"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items = ItemService(db).list_items(
        current_user.id, location_id=location_id, category=category, search=search
    )
    return {"items": items}


# ============================================
# 絞り込み一覧
# ============================================
@router.get("/favorites", response_model=ItemListResponse)
def list_favorite_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"items": ItemService(db).list_favorites(current_user.id)}


@router.get("/lost", response_model=ItemListResponse)
def list_lost_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"items": ItemService(db).list_lost(current_user.id)}


@router.get("/broken", response_model=ItemListResponse)
def list_broken_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"items": ItemService(db).list_broken(current_user.id)}


@router.get("/lent", response_model=ItemListResponse)
def list_lent_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"items": ItemService(db).list_lent(current_user.id)}


@router.get("/maintenance-due", response_model=ItemListResponse)
def list_items_needing_maintenance(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """次回メンテナンス予定日を過ぎた持ち物"""
    return {"items": ItemService(db).list_needing_maintenance(current_user.id)}


@router.get("/warranty-expiring", response_model=ItemListResponse)
def list_warranty_expiring_items(
    days: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"items": ItemService(db).list_warranty_expiring(current_user.id, days)}


@router.get("/barcode/{barcode}", response_model=ItemEnvelope)
def get_item_by_barcode(
    barcode: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"item": ItemService(db).find_by_barcode(barcode, current_user.id)}


@router.get("/custom/{custom_id}", response_model=ItemEnvelope)
def get_item_by_custom_id(
    custom_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"item": ItemService(db).find_by_custom_id(custom_id, current_user.id)}


# ============================================
# CRUD
# ============================================
@router.get("/{item_id}", response_model=ItemEnvelope)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """持ち物を取得（最終使用日時を更新）"""
    return {"item": ItemService(db).use(item_id, current_user.id)}


@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_item(
    request: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = ItemService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"item": item}


@router.put("/{item_id}", response_model=ItemEnvelope)
def update_item(
    item_id: str,
    request: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = ItemService(db).update(item_id, current_user.id, request.model_dump(exclude_unset=True))
    return {"item": item}


@router.patch("/{item_id}/move", response_model=ItemEnvelope)
def move_item(
    item_id: str,
    request: ItemMoveRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """保管場所を移動（移動履歴を記録）"""
    item = ItemService(db).move(
        item_id,
        current_user.id,
        request.location_id,
        reason=request.reason,
        notes=request.notes,
    )
    return {"item": item}


@router.patch("/{item_id}/favorite", response_model=ItemEnvelope)
def toggle_item_favorite(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"item": ItemService(db).toggle_favorite(item_id, current_user.id)}


@router.patch("/{item_id}/lost", response_model=ItemEnvelope)
def toggle_item_lost(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"item": ItemService(db).toggle_lost(item_id, current_user.id)}


@router.patch("/{item_id}/broken", response_model=ItemEnvelope)
def toggle_item_broken(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"item": ItemService(db).toggle_broken(item_id, current_user.id)}


@router.patch("/{item_id}/archive", response_model=MessageResponse)
def archive_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ItemService(db).archive(item_id, current_user.id)
    return MessageResponse(message="Item archived successfully")


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ItemService(db).delete(item_id, current_user.id)
    return MessageResponse(message="Item deleted successfully")


# ============================================
# 履歴
# ============================================
@router.get("/{item_id}/history", response_model=LocationHistoryResponse)
def get_item_location_history(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"history": ItemService(db).location_history(item_id, current_user.id)}


@router.get("/{item_id}/maintenance", response_model=MaintenanceListResponse)
def get_item_maintenance_history(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"maintenance": ItemService(db).maintenance_history(item_id, current_user.id)}


@router.post(
    "/{item_id}/maintenance",
    response_model=MaintenanceEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def add_item_maintenance(
    item_id: str,
    request: MaintenanceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record = ItemService(db).add_maintenance(item_id, current_user.id, request.model_dump())
    return {"maintenance": record}
