"""
Task API エンドポイント
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse, order_entries
from app.schemas.day_tracker import (
    TaskCreate,
    TaskEnvelope,
    TaskListResponse,
    TaskReorderRequest,
    TaskStatus,
    TaskUpdate,
)
from app.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(
    board_id: Optional[str] = Query(None, alias="boardId", description="ボードID"),
    task_status: Optional[TaskStatus] = Query(None, alias="status", description="ステータス"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """タスク一覧を取得"""
    tasks = TaskService(db).list_tasks(current_user.id, board_id=board_id, status=task_status)
    return {"tasks": tasks}


@router.get("/inbox", response_model=TaskListResponse)
def list_inbox_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """ボード未割り当てのタスク"""
    return {"tasks": TaskService(db).list_inbox(current_user.id)}


@router.get("/overdue", response_model=TaskListResponse)
def list_overdue_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """期限切れの未完了タスク"""
    return {"tasks": TaskService(db).list_overdue(current_user.id)}


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"task": TaskService(db).get(task_id, current_user.id)}


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = TaskService(db).create(current_user.id, request.model_dump(exclude_none=True))
    return {"task": task}


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: str,
    request: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = TaskService(db).update(task_id, current_user.id, request.model_dump(exclude_unset=True))
    return {"task": task}


@router.patch("/reorder", response_model=MessageResponse)
def reorder_tasks(
    request: TaskReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """タスクの並び順・所属ボードを更新"""
    TaskService(db).reorder(current_user.id, order_entries(request.task_orders))
    return MessageResponse(message="Task order updated successfully")


@router.patch("/{task_id}/complete", response_model=TaskEnvelope)
def complete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"task": TaskService(db).complete(task_id, current_user.id)}


@router.patch("/{task_id}/archive", response_model=MessageResponse)
def archive_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    TaskService(db).archive(task_id, current_user.id)
    return MessageResponse(message="Task archived successfully")


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    TaskService(db).delete(task_id, current_user.id)
    return MessageResponse(message="Task deleted successfully")
