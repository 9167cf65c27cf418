"""
ユーザー所有リソースの共通CRUD

各モジュールのサービスはこのクラスを継承し、model と entity_name を設定する
すべてのクエリは user_id で絞り込む（他ユーザーのIDは「存在しない」扱い）
"""
import logging
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Query, Session

from app.clock import utcnow
from app.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class OwnedResourceService:
    """ユーザー所有リソースのサービス基底クラス"""

    model: Any = None
    entity_name: str = "Resource"
    # 更新を許可しないカラム
    protected_fields = {"id", "user_id", "created_at", "updated_at"}

    def __init__(self, db: Session):
        self.db = db

    # ============================================
    # 取得
    # ============================================
    def _owned(self, user_id: str) -> Query:
        return self.db.query(self.model).filter(self.model.user_id == user_id)

    def _active(self, user_id: str) -> Query:
        """アーカイブされていないレコード"""
        return self._owned(user_id).filter(self.model.is_archived.is_(False))

    def _ordered(self, query: Query) -> Query:
        return query.order_by(self.model.sort_order, self.model.created_at)

    def find(self, resource_id: str, user_id: str):
        return self._owned(user_id).filter(self.model.id == resource_id).first()

    def get(self, resource_id: str, user_id: str):
        """IDで取得（見つからなければNotFoundError）"""
        resource = self.find(resource_id, user_id)
        if resource is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return resource

    # ============================================
    # 作成・更新
    # ============================================
    def create(self, user_id: str, data: dict):
        resource = self.model(user_id=user_id, **self._clean(data))
        self.db.add(resource)
        self.db.commit()
        self.db.refresh(resource)
        logger.info(f"{self.entity_name}作成: id={resource.id}, user_id={user_id}")
        return resource

    def update(self, resource_id: str, user_id: str, data: dict):
        resource = self.get(resource_id, user_id)
        self._apply(resource, data)
        self.db.commit()
        self.db.refresh(resource)
        return resource

    def _clean(self, data: dict) -> dict:
        return {k: v for k, v in data.items() if k not in self.protected_fields}

    def _apply(self, resource, data: dict) -> None:
        for key, value in self._clean(data).items():
            setattr(resource, key, value)
        resource.updated_at = utcnow()

    def _save(self, resource):
        self.db.commit()
        self.db.refresh(resource)
        return resource

    # ============================================
    # アーカイブ・削除・並び替え
    # ============================================
    def archive(self, resource_id: str, user_id: str) -> None:
        """アーカイブ（論理削除）"""
        resource = self.get(resource_id, user_id)
        resource.is_archived = True
        resource.updated_at = utcnow()
        self.db.commit()

    def delete(self, resource_id: str, user_id: str) -> None:
        """物理削除"""
        resource = self.get(resource_id, user_id)
        self.db.delete(resource)
        self.db.commit()
        logger.info(f"{self.entity_name}削除: id={resource_id}, user_id={user_id}")

    def reorder(self, user_id: str, orders: Iterable[dict]) -> int:
        """
        並び順を一括更新

        orders の各要素は {"id", "sort_order", ...追加カラム}
        他ユーザーのIDは無視する。更新件数を返す
        """
        updated = 0
        for entry in orders:
            resource = self.find(entry["id"], user_id)
            if resource is None:
                continue
            for key, value in entry.items():
                if key != "id":
                    setattr(resource, key, value)
            resource.updated_at = utcnow()
            updated += 1
        self.db.commit()
        return updated


class TreeResourceService(OwnedResourceService):
    """parent_id で階層構造を持つリソース（ノートブック・カテゴリ・保管場所）"""

    def list_all(self, user_id: str) -> list:
        return self._ordered(self._active(user_id)).all()

    def list_root(self, user_id: str) -> list:
        return self._ordered(
            self._active(user_id).filter(self.model.parent_id.is_(None))
        ).all()

    def list_children(self, parent_id: str, user_id: str) -> list:
        return self._ordered(
            self._active(user_id).filter(self.model.parent_id == parent_id)
        ).all()

    def _check_parent(
        self, parent_id: Optional[str], user_id: str, resource_id: Optional[str] = None
    ) -> None:
        if not parent_id:
            return
        if parent_id == resource_id:
            raise ValidationError(f"{self.entity_name} cannot be its own parent")
        if self.find(parent_id, user_id) is None:
            raise NotFoundError(f"Parent {self.entity_name.lower()} not found")

    def create(self, user_id: str, data: dict):
        self._check_parent(data.get("parent_id"), user_id)
        return super().create(user_id, data)

    def update(self, resource_id: str, user_id: str, data: dict):
        self._check_parent(data.get("parent_id"), user_id, resource_id)
        return super().update(resource_id, user_id, data)

    def reorder(self, user_id: str, orders: Iterable[dict]) -> int:
        orders = list(orders)
        for entry in orders:
            self._check_parent(entry.get("parent_id"), user_id, entry["id"])
        return super().reorder(user_id, orders)


def like_pattern(term: Optional[str]) -> str:
    """部分一致検索用のLIKEパターン"""
    return f"%{term or ''}%"
