"""
Document Category API エンドポイント（階層構造）
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse, order_entries
from app.schemas.document import (
    DocumentCategoryCreate,
    DocumentCategoryEnvelope,
    DocumentCategoryListResponse,
    DocumentCategoryReorderRequest,
    DocumentCategoryUpdate,
)
from app.services.document_category_service import DocumentCategoryService

router = APIRouter(prefix="/api/document-categories", tags=["Documents"])


@router.get("", response_model=DocumentCategoryListResponse)
def list_document_categories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"categories": DocumentCategoryService(db).list_all(current_user.id)}


@router.get("/root", response_model=DocumentCategoryListResponse)
def list_root_document_categories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"categories": DocumentCategoryService(db).list_root(current_user.id)}


@router.get("/{parent_id}/children", response_model=DocumentCategoryListResponse)
def list_child_document_categories(
    parent_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"categories": DocumentCategoryService(db).list_children(parent_id, current_user.id)}


@router.get("/{category_id}", response_model=DocumentCategoryEnvelope)
def get_document_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"category": DocumentCategoryService(db).get(category_id, current_user.id)}


@router.post("", response_model=DocumentCategoryEnvelope, status_code=status.HTTP_201_CREATED)
def create_document_category(
    request: DocumentCategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    category = DocumentCategoryService(db).create(
        current_user.id, request.model_dump(exclude_none=True)
    )
    return {"category": category}


@router.put("/{category_id}", response_model=DocumentCategoryEnvelope)
def update_document_category(
    category_id: str,
    request: DocumentCategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    category = DocumentCategoryService(db).update(
        category_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"category": category}


@router.patch("/reorder", response_model=MessageResponse)
def reorder_document_categories(
    request: DocumentCategoryReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    DocumentCategoryService(db).reorder(current_user.id, order_entries(request.category_orders))
    return MessageResponse(message="Document category order updated successfully")


@router.patch("/{category_id}/archive", response_model=MessageResponse)
def archive_document_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    DocumentCategoryService(db).archive(category_id, current_user.id)
    return MessageResponse(message="Document category archived successfully")


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_document_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    DocumentCategoryService(db).delete(category_id, current_user.id)
    return MessageResponse(message="Document category deleted successfully")
