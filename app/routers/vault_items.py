"""
Vault Item API エンドポイント

閲覧・作成・編集・アーカイブ・削除はアクセスログに記録される
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_client_ip, get_current_user, get_user_agent
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.vault import (
    AccessLogResponse,
    VaultItemCreate,
    VaultItemEnvelope,
    VaultItemListResponse,
    VaultItemUpdate,
)
from app.services.vault_item_service import VaultItemService

router = APIRouter(prefix="/api/vault-items", tags=["Vault"])


def get_vault_service(request: Request, db: Session = Depends(get_db)) -> VaultItemService:
    """アクセス元情報付きのサービスを生成"""
    return VaultItemService(
        db, ip_address=get_client_ip(request), user_agent=get_user_agent(request)
    )


@router.get("", response_model=VaultItemListResponse)
def list_vault_items(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    item_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = Query(None),
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    items = service.list_items(
        current_user.id, category_id=category_id, item_type=item_type, search=search
    )
    return {"items": items}


@router.get("/favorites", response_model=VaultItemListResponse)
def list_favorite_vault_items(
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    return {"items": service.list_favorites(current_user.id)}


@router.get("/expiring", response_model=VaultItemListResponse)
def list_expiring_vault_items(
    days: int = Query(30, ge=1, le=365),
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    """有効期限が近いアイテム"""
    return {"items": service.list_expiring(current_user.id, days)}


@router.get("/{item_id}", response_model=VaultItemEnvelope)
def get_vault_item(
    item_id: str,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    """アイテムを取得（アクセス回数とログを記録）"""
    return {"item": service.view(item_id, current_user.id)}


@router.get("/{item_id}/access-log", response_model=AccessLogResponse)
def get_vault_item_access_log(
    item_id: str,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    return {"access_log": service.access_log(item_id, current_user.id)}


@router.post("", response_model=VaultItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_vault_item(
    request: VaultItemCreate,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    item = service.create(current_user.id, request.model_dump(exclude_none=True))
    return {"item": item}


@router.put("/{item_id}", response_model=VaultItemEnvelope)
def update_vault_item(
    item_id: str,
    request: VaultItemUpdate,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    item = service.update(item_id, current_user.id, request.model_dump(exclude_unset=True))
    return {"item": item}


@router.patch("/{item_id}/favorite", response_model=VaultItemEnvelope)
def toggle_vault_item_favorite(
    item_id: str,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    return {"item": service.toggle_favorite(item_id, current_user.id)}


@router.patch("/{item_id}/archive", response_model=MessageResponse)
def archive_vault_item(
    item_id: str,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    service.archive(item_id, current_user.id)
    return MessageResponse(message="Vault item archived successfully")


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_vault_item(
    item_id: str,
    service: VaultItemService = Depends(get_vault_service),
    current_user: User = Depends(get_current_user),
):
    service.delete(item_id, current_user.id)
    return MessageResponse(message="Vault item deleted successfully")
