"""
Location API エンドポイント（部屋 > 棚 > 箱 などの階層）
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse, order_entries
from app.schemas.inventory import (
    LocationCreate,
    LocationEnvelope,
    LocationListResponse,
    LocationReorderRequest,
    LocationUpdate,
)
from app.services.location_service import LocationService

router = APIRouter(prefix="/api/locations", tags=["Inventory"])


@router.get("", response_model=LocationListResponse)
def list_locations(
    location_type: Optional[str] = Query(None, alias="type", description="room / shelf / box など"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    locations = LocationService(db).list_locations(current_user.id, location_type=location_type)
    return {"locations": locations}


@router.get("/root", response_model=LocationListResponse)
def list_root_locations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"locations": LocationService(db).list_root(current_user.id)}


@router.get("/{parent_id}/children", response_model=LocationListResponse)
def list_child_locations(
    parent_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"locations": LocationService(db).list_children(parent_id, current_user.id)}


@router.get("/{location_id}", response_model=LocationEnvelope)
def get_location(
    location_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"location": LocationService(db).get(location_id, current_user.id)}


@router.post("", response_model=LocationEnvelope, status_code=status.HTTP_201_CREATED)
def create_location(
    request: LocationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    location = LocationService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"location": location}


@router.put("/{location_id}", response_model=LocationEnvelope)
def update_location(
    location_id: str,
    request: LocationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    location = LocationService(db).update(
        location_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"location": location}


@router.patch("/reorder", response_model=MessageResponse)
def reorder_locations(
    request: LocationReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    LocationService(db).reorder(current_user.id, order_entries(request.location_orders))
    return MessageResponse(message="Location order updated successfully")


@router.patch("/{location_id}/archive", response_model=MessageResponse)
def archive_location(
    location_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    LocationService(db).archive(location_id, current_user.id)
    return MessageResponse(message="Location archived successfully")


@router.delete("/{location_id}", response_model=MessageResponse)
def delete_location(
    location_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """保管場所を削除（中の持ち物は未割り当てになる）"""
    LocationService(db).delete(location_id, current_user.id)
    return MessageResponse(message="Location deleted successfully")
