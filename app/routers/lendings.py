"""
Lending API エンドポイント（持ち物の貸出管理）
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.inventory import (
    LendingCreate,
    LendingEnvelope,
    LendingListResponse,
    LendingReturnRequest,
    LendingStatsResponse,
    LendingUpdate,
)
from app.services.lending_service import LendingService

router = APIRouter(prefix="/api/lendings", tags=["Inventory"])


@router.get("", response_model=LendingListResponse)
def list_lendings(
    lending_status: Optional[str] = Query(None, alias="status", description="active / returned / overdue / lost"),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lendings = LendingService(db).list_lendings(current_user.id, status=lending_status, search=search)
    return {"lendings": lendings}


@router.get("/active", response_model=LendingListResponse)
def list_active_lendings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lendings": LendingService(db).list_active(current_user.id)}


@router.get("/overdue", response_model=LendingListResponse)
def list_overdue_lendings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lendings": LendingService(db).list_overdue(current_user.id)}


@router.get("/stats", response_model=LendingStatsResponse)
def get_lending_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"stats": LendingService(db).stats(current_user.id)}


@router.post("/check-overdue", response_model=LendingListResponse)
def check_overdue_lendings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """返却予定日を過ぎた貸出を延滞にし、延滞にした記録を返す"""
    return {"lendings": LendingService(db).check_overdue(current_user.id)}


@router.get("/item/{item_id}", response_model=LendingListResponse)
def list_lendings_for_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lendings": LendingService(db).list_for_item(item_id, current_user.id)}


@router.get("/{lending_id}", response_model=LendingEnvelope)
def get_lending(
    lending_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lending": LendingService(db).get(lending_id, current_user.id)}


@router.post("", response_model=LendingEnvelope, status_code=status.HTTP_201_CREATED)
def create_lending(
    request: LendingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """貸出を記録（持ち物は貸出中になる）"""
    lending = LendingService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"lending": lending}


@router.put("/{lending_id}", response_model=LendingEnvelope)
def update_lending(
    lending_id: str,
    request: LendingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lending = LendingService(db).update(
        lending_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"lending": lending}


@router.patch("/{lending_id}/return", response_model=LendingEnvelope)
def return_lending(
    lending_id: str,
    request: Optional[LendingReturnRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    request = request or LendingReturnRequest()
    lending = LendingService(db).return_item(
        lending_id,
        current_user.id,
        condition_when_returned=request.condition_when_returned,
        damage_notes=request.damage_notes,
    )
    return {"lending": lending}


@router.patch("/{lending_id}/overdue", response_model=LendingEnvelope)
def mark_lending_overdue(
    lending_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lending": LendingService(db).mark_overdue(lending_id, current_user.id)}


@router.patch("/{lending_id}/lost", response_model=LendingEnvelope)
def mark_lending_lost(
    lending_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lending": LendingService(db).mark_lost(lending_id, current_user.id)}


@router.patch("/{lending_id}/reminder", response_model=LendingEnvelope)
def send_lending_reminder(
    lending_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"lending": LendingService(db).send_reminder(lending_id, current_user.id)}


@router.delete("/{lending_id}", response_model=MessageResponse)
def delete_lending(
    lending_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    LendingService(db).delete(lending_id, current_user.id)
    return MessageResponse(message="Lending deleted successfully")
