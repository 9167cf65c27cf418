"""
Note API エンドポイント
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.knowledge_base import (
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteUpdate,
    TagListResponse,
)
from app.services.note_service import NoteService
from app.services.tag_service import TagService

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get("", response_model=NoteListResponse)
def list_notes(
    notebook_id: Optional[str] = Query(None, alias="notebookId"),
    search: Optional[str] = Query(None, description="タイトル・本文の部分一致"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ノート一覧を取得（ピン留め優先・更新日の新しい順）"""
    notes = NoteService(db).list_notes(current_user.id, notebook_id=notebook_id, search=search)
    return {"notes": notes}


@router.get("/favorites", response_model=NoteListResponse)
def list_favorite_notes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"notes": NoteService(db).list_favorites(current_user.id)}


@router.get("/pinned", response_model=NoteListResponse)
def list_pinned_notes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"notes": NoteService(db).list_pinned(current_user.id)}


@router.get("/tag/{tag_id}", response_model=NoteListResponse)
def list_notes_by_tag(
    tag_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"notes": NoteService(db).list_by_tag(tag_id, current_user.id)}


@router.get("/{note_id}", response_model=NoteEnvelope)
def get_note(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ノートを取得（閲覧回数を記録）"""
    return {"note": NoteService(db).view(note_id, current_user.id)}


@router.post("", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
def create_note(
    request: NoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ノートを作成（tags に指定した名前のタグを付与、無ければ作成）"""
    data = request.model_dump(exclude_none=True, exclude={"tags"})
    note = NoteService(db).create_note(current_user.id, data, tags=request.tags)
    return {"note": note}


@router.put("/{note_id}", response_model=NoteEnvelope)
def update_note(
    note_id: str,
    request: NoteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = request.model_dump(exclude_unset=True, exclude={"tags"})
    note = NoteService(db).update_note(note_id, current_user.id, data, tags=request.tags)
    return {"note": note}


@router.patch("/{note_id}/favorite", response_model=NoteEnvelope)
def toggle_note_favorite(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"note": NoteService(db).toggle_favorite(note_id, current_user.id)}


@router.patch("/{note_id}/pin", response_model=NoteEnvelope)
def toggle_note_pin(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"note": NoteService(db).toggle_pin(note_id, current_user.id)}


@router.patch("/{note_id}/archive", response_model=MessageResponse)
def archive_note(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    NoteService(db).archive(note_id, current_user.id)
    return MessageResponse(message="Note archived successfully")


@router.delete("/{note_id}", response_model=MessageResponse)
def delete_note(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    NoteService(db).delete(note_id, current_user.id)
    return MessageResponse(message="Note deleted successfully")


# ============================================
# タグの付け外し
# ============================================
@router.get("/{note_id}/tags", response_model=TagListResponse)
def list_note_tags(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    note = NoteService(db).get(note_id, current_user.id)
    return {"tags": TagService(db).tags_for_note(note.id)}


@router.post("/{note_id}/tags/{tag_id}", response_model=MessageResponse)
def add_note_tag(
    note_id: str,
    tag_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    note = NoteService(db).get(note_id, current_user.id)
    tags = TagService(db)
    tag = tags.get(tag_id, current_user.id)
    tags.add_tag_to_note(note.id, tag.id)
    return MessageResponse(message="Tag added to note")


@router.delete("/{note_id}/tags/{tag_id}", response_model=MessageResponse)
def remove_note_tag(
    note_id: str,
    tag_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    note = NoteService(db).get(note_id, current_user.id)
    tags = TagService(db)
    tag = tags.get(tag_id, current_user.id)
    tags.remove_tag_from_note(note.id, tag.id)
    return MessageResponse(message="Tag removed from note")
