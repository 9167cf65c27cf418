"""
Board API エンドポイント
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse, order_entries
from app.schemas.day_tracker import (
    BoardCreate,
    BoardEnvelope,
    BoardListResponse,
    BoardReorderRequest,
    BoardUpdate,
)
from app.services.board_service import BoardService

router = APIRouter(prefix="/api/boards", tags=["Boards"])


@router.get("", response_model=BoardListResponse)
def list_boards(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ボード一覧を取得"""
    return {"boards": BoardService(db).list_boards(current_user.id)}


@router.get("/{board_id}", response_model=BoardEnvelope)
def get_board(
    board_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"board": BoardService(db).get(board_id, current_user.id)}


@router.post("", response_model=BoardEnvelope, status_code=status.HTTP_201_CREATED)
def create_board(
    request: BoardCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ボードを作成"""
    board = BoardService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"board": board}


@router.put("/{board_id}", response_model=BoardEnvelope)
def update_board(
    board_id: str,
    request: BoardUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    board = BoardService(db).update(
        board_id, current_user.id, request.model_dump(exclude_unset=True)
    )
    return {"board": board}


@router.patch("/reorder", response_model=MessageResponse)
def reorder_boards(
    request: BoardReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ボードの並び順を更新"""
    BoardService(db).reorder(current_user.id, order_entries(request.board_orders))
    return MessageResponse(message="Board order updated successfully")


@router.patch("/{board_id}/archive", response_model=MessageResponse)
def archive_board(
    board_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    BoardService(db).archive(board_id, current_user.id)
    return MessageResponse(message="Board archived successfully")


@router.delete("/{board_id}", response_model=MessageResponse)
def delete_board(
    board_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ボードを削除（所属タスクも削除される）"""
    BoardService(db).delete(board_id, current_user.id)
    return MessageResponse(message="Board deleted successfully")
