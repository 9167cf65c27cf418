"""
カンバンボードサービス
"""
from typing import List

from app.models.day_tracker import Board
from app.services.base import OwnedResourceService


class BoardService(OwnedResourceService):
    """カンバンボードサービスクラス"""

    model = Board
    entity_name = "Board"

    def list_boards(self, user_id: str) -> List[Board]:
        """アーカイブされていないボード一覧（並び順・作成日順）"""
        return self._ordered(self._active(user_id)).all()
