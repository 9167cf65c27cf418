"""
タスクサービス

ボードに属さないタスクは「受信箱（inbox）」として扱う
"""
import logging
from typing import Iterable, List, Optional

from app.clock import utcnow
from app.models.day_tracker import Task
from app.services.base import OwnedResourceService
from app.services.board_service import BoardService

logger = logging.getLogger(__name__)

TASK_STATUSES = ("todo", "in-progress", "done")
TASK_PRIORITIES = ("low", "medium", "high", "urgent")
OPEN_STATUSES = ("todo", "in-progress")


class TaskService(OwnedResourceService):
    """タスクサービスクラス"""

    model = Task
    entity_name = "Task"

    def list_tasks(
        self,
        user_id: str,
        board_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Task]:
        """タスク一覧（ボード・ステータスで絞り込み可）"""
        query = self._active(user_id)
        if board_id:
            query = query.filter(Task.board_id == board_id)
        if status:
            query = query.filter(Task.status == status)
        return self._ordered(query).all()

    def list_inbox(self, user_id: str) -> List[Task]:
        """ボード未割り当てのタスク"""
        return self._ordered(self._active(user_id).filter(Task.board_id.is_(None))).all()

    def list_overdue(self, user_id: str) -> List[Task]:
        """期限切れの未完了タスク（期限が古い順）"""
        return (
            self._active(user_id)
            .filter(
                Task.due_date.is_not(None),
                Task.due_date < utcnow(),
                Task.status.in_(OPEN_STATUSES),
            )
            .order_by(Task.due_date)
            .all()
        )

    def _check_board(self, board_id: Optional[str], user_id: str) -> None:
        # 他ユーザーのボードへは割り当てられない
        if board_id:
            BoardService(self.db).get(board_id, user_id)

    def create(self, user_id: str, data: dict) -> Task:
        self._check_board(data.get("board_id"), user_id)
        if data.get("status") == "done" and not data.get("completed_at"):
            data = {**data, "completed_at": utcnow()}
        return super().create(user_id, data)

    def update(self, resource_id: str, user_id: str, data: dict) -> Task:
        self._check_board(data.get("board_id"), user_id)
        return super().update(resource_id, user_id, data)

    def complete(self, task_id: str, user_id: str) -> Task:
        """タスクを完了にする"""
        task = self.get(task_id, user_id)
        now = utcnow()
        task.status = "done"
        task.completed_at = now
        task.updated_at = now
        return self._save(task)

    def reorder(self, user_id: str, orders: Iterable[dict]) -> int:
        orders = list(orders)
        for entry in orders:
            self._check_board(entry.get("board_id"), user_id)
        return super().reorder(user_id, orders)
