"""
Journal API エンドポイント
"""

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.errors import NotFoundError, ValidationError
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.day_tracker import (
    JournalCreate,
    JournalEnvelope,
    JournalListResponse,
    JournalStatsResponse,
    JournalUpdate,
)
from app.services.journal_service import JournalService

router = APIRouter(prefix="/api/journals", tags=["Journals"])


@router.get("", response_model=JournalListResponse)
def list_journals(
    limit: int = Query(50, ge=1, le=200, description="取得件数"),
    offset: int = Query(0, ge=0, description="スキップ件数"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """日記一覧を取得（新しい順）"""
    return {"journals": JournalService(db).list_journals(current_user.id, limit, offset)}


@router.get("/date/{day}", response_model=JournalEnvelope)
def get_journal_by_date(
    day: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """指定日の日記を取得（YYYY-MM-DD）"""
    journal = JournalService(db).get_by_date(current_user.id, day)
    if journal is None:
        raise NotFoundError("Journal entry not found for this date")
    return {"journal": journal}


@router.get("/recent", response_model=JournalListResponse)
def list_recent_journals(
    days: int = Query(7, ge=1, le=365),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"journals": JournalService(db).list_recent(current_user.id, days)}


@router.get("/stats", response_model=JournalStatsResponse)
def get_journal_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """日記の統計（件数・平均エネルギー・平均生産性・最頻の気分）"""
    return {"stats": JournalService(db).stats(current_user.id)}


@router.get("/search", response_model=JournalListResponse)
def search_journals(
    q: str = Query(..., min_length=1, description="検索キーワード"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"journals": JournalService(db).search(current_user.id, q)}


@router.get("/mood/{mood}", response_model=JournalListResponse)
def list_journals_by_mood(
    mood: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"journals": JournalService(db).list_by_mood(current_user.id, mood)}


@router.get("/range", response_model=JournalListResponse)
def list_journals_by_range(
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """期間内の日記を取得"""
    if start_date > end_date:
        raise ValidationError("startDate must be before endDate")
    return {"journals": JournalService(db).list_by_range(current_user.id, start_date, end_date)}


@router.get("/{journal_id}", response_model=JournalEnvelope)
def get_journal(
    journal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"journal": JournalService(db).get(journal_id, current_user.id)}


@router.post("", response_model=JournalEnvelope, status_code=status.HTTP_201_CREATED)
def create_journal(
    request: JournalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    journal = JournalService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"journal": journal}


@router.put("/{journal_id}", response_model=JournalEnvelope)
def update_journal(
    journal_id: str,
    request: JournalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    journal = JournalService(db).update(
        journal_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"journal": journal}


@router.delete("/{journal_id}", response_model=MessageResponse)
def delete_journal(
    journal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    JournalService(db).delete(journal_id, current_user.id)
    return MessageResponse(message="Journal entry deleted successfully")
