"""
Vault Category API エンドポイント
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse, order_entries
from app.schemas.vault import (
    VaultCategoryCreate,
    VaultCategoryEnvelope,
    VaultCategoryListResponse,
    VaultCategoryReorderRequest,
    VaultCategoryUpdate,
)
from app.services.vault_category_service import VaultCategoryService

router = APIRouter(prefix="/api/vault-categories", tags=["Vault"])


@router.get("", response_model=VaultCategoryListResponse)
def list_vault_categories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"categories": VaultCategoryService(db).list_categories(current_user.id)}


@router.get("/{category_id}", response_model=VaultCategoryEnvelope)
def get_vault_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"category": VaultCategoryService(db).get(category_id, current_user.id)}


@router.post("", response_model=VaultCategoryEnvelope, status_code=status.HTTP_201_CREATED)
def create_vault_category(
    request: VaultCategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    category = VaultCategoryService(db).create(
        current_user.id, request.model_dump(exclude_none=True)
    )
    return {"category": category}


@router.put("/{category_id}", response_model=VaultCategoryEnvelope)
def update_vault_category(
    category_id: str,
    request: VaultCategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    category = VaultCategoryService(db).update(
        category_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"category": category}


@router.patch("/reorder", response_model=MessageResponse)
def reorder_vault_categories(
    request: VaultCategoryReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    VaultCategoryService(db).reorder(current_user.id, order_entries(request.category_orders))
    return MessageResponse(message="Vault category order updated successfully")


@router.patch("/{category_id}/archive", response_model=MessageResponse)
def archive_vault_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    VaultCategoryService(db).archive(category_id, current_user.id)
    return MessageResponse(message="Vault category archived successfully")


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_vault_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """カテゴリを削除（アイテムは未分類になる）"""
    VaultCategoryService(db).delete(category_id, current_user.id)
    return MessageResponse(message="Vault category deleted successfully")
