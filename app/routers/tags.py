"""
Tag API エンドポイント
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.knowledge_base import TagCreate, TagEnvelope, TagListResponse, TagUpdate
from app.services.tag_service import TagService

router = APIRouter(prefix="/api/tags", tags=["Tags"])


@router.get("", response_model=TagListResponse)
def list_tags(
    search: Optional[str] = Query(None, description="タグ名の部分一致"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"tags": TagService(db).list_tags(current_user.id, search=search)}


@router.get("/popular", response_model=TagListResponse)
def list_popular_tags(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """使用回数の多いタグ"""
    return {"tags": TagService(db).list_popular(current_user.id, limit)}


@router.get("/{tag_id}", response_model=TagEnvelope)
def get_tag(
    tag_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"tag": TagService(db).get(tag_id, current_user.id)}


@router.post("", response_model=TagEnvelope, status_code=status.HTTP_201_CREATED)
def create_tag(
    request: TagCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """タグを作成（同名のタグがあれば 409）"""
    tag = TagService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"tag": tag}


@router.put("/{tag_id}", response_model=TagEnvelope)
def update_tag(
    tag_id: str,
    request: TagUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tag = TagService(db).update(tag_id, current_user.id, request.model_dump(exclude_unset=True))
    return {"tag": tag}


@router.delete("/{tag_id}", response_model=MessageResponse)
def delete_tag(
    tag_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """タグを削除（ノートからも外れる）"""
    TagService(db).delete(tag_id, current_user.id)
    return MessageResponse(message="Tag deleted successfully")
