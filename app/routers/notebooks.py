"""
Notebook API エンドポイント
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse, order_entries
from app.schemas.knowledge_base import (
    NotebookCreate,
    NotebookEnvelope,
    NotebookListResponse,
    NotebookReorderRequest,
    NotebookUpdate,
)
from app.services.notebook_service import NotebookService

router = APIRouter(prefix="/api/notebooks", tags=["Notebooks"])


@router.get("", response_model=NotebookListResponse)
def list_notebooks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"notebooks": NotebookService(db).list_all(current_user.id)}


@router.get("/root", response_model=NotebookListResponse)
def list_root_notebooks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """最上位のノートブック"""
    return {"notebooks": NotebookService(db).list_root(current_user.id)}


@router.get("/{parent_id}/children", response_model=NotebookListResponse)
def list_child_notebooks(
    parent_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"notebooks": NotebookService(db).list_children(parent_id, current_user.id)}


@router.get("/{notebook_id}", response_model=NotebookEnvelope)
def get_notebook(
    notebook_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"notebook": NotebookService(db).get(notebook_id, current_user.id)}


@router.post("", response_model=NotebookEnvelope, status_code=status.HTTP_201_CREATED)
def create_notebook(
    request: NotebookCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notebook = NotebookService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"notebook": notebook}


@router.put("/{notebook_id}", response_model=NotebookEnvelope)
def update_notebook(
    notebook_id: str,
    request: NotebookUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notebook = NotebookService(db).update(
        notebook_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"notebook": notebook}


@router.patch("/reorder", response_model=MessageResponse)
def reorder_notebooks(
    request: NotebookReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    NotebookService(db).reorder(current_user.id, order_entries(request.notebook_orders))
    return MessageResponse(message="Notebook order updated successfully")


@router.patch("/{notebook_id}/archive", response_model=MessageResponse)
def archive_notebook(
    notebook_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    NotebookService(db).archive(notebook_id, current_user.id)
    return MessageResponse(message="Notebook archived successfully")


@router.delete("/{notebook_id}", response_model=MessageResponse)
def delete_notebook(
    notebook_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ノートブックを削除（中のノートは未分類になる）"""
    NotebookService(db).delete(notebook_id, current_user.id)
    return MessageResponse(message="Notebook deleted successfully")
