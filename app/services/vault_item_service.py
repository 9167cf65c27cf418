"""
保管庫アイテムサービス

暗号化・復号はクライアント側で行う。サーバーは暗号化済みデータ（encrypted_data）と
鍵ID（encryption_key_id）を保存するだけで、内容は解釈しない

閲覧・作成・編集・アーカイブ・削除はすべてアクセスログに記録する
"""
import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import or_

from app.clock import utcnow
from app.models.vault import VaultAccessLog, VaultItem
from app.services.base import OwnedResourceService, like_pattern
from app.services.vault_category_service import VaultCategoryService

logger = logging.getLogger(__name__)

ACCESS_LOG_LIMIT = 50


class VaultItemService(OwnedResourceService):
    """保管庫アイテムサービスクラス"""

    model = VaultItem
    entity_name = "Vault item"

    def __init__(self, db, ip_address: Optional[str] = None, user_agent: Optional[str] = None):
        super().__init__(db)
        self.ip_address = ip_address
        self.user_agent = user_agent

    def _by_name(self, query):
        return query.order_by(VaultItem.is_favorite.desc(), VaultItem.name)

    def list_items(
        self,
        user_id: str,
        category_id: Optional[str] = None,
        item_type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[VaultItem]:
        query = self._active(user_id)
        if category_id:
            query = query.filter(VaultItem.category_id == category_id)
        if item_type:
            query = query.filter(VaultItem.type == item_type)
        if search:
            pattern = like_pattern(search)
            query = query.filter(
                or_(
                    VaultItem.name.like(pattern),
                    VaultItem.website.like(pattern),
                    VaultItem.username.like(pattern),
                    VaultItem.email.like(pattern),
                )
            )
        return self._by_name(query).all()

    def list_favorites(self, user_id: str) -> List[VaultItem]:
        return (
            self._active(user_id)
            .filter(VaultItem.is_favorite.is_(True))
            .order_by(VaultItem.name)
            .all()
        )

    def list_expiring(self, user_id: str, days: int = 30) -> List[VaultItem]:
        """days日以内に有効期限を迎えるアイテム"""
        now = utcnow()
        return (
            self._active(user_id)
            .filter(
                VaultItem.expires_at.is_not(None),
                VaultItem.expires_at >= now,
                VaultItem.expires_at <= now + timedelta(days=days),
            )
            .order_by(VaultItem.expires_at)
            .all()
        )

    # ============================================
    # アクセスログ
    # ============================================
    def _log(self, user_id: str, item_id: str, action: str) -> None:
        self.db.add(
            VaultAccessLog(
                user_id=user_id,
                vault_item_id=item_id,
                action=action,
                success=True,
                ip_address=self.ip_address,
                user_agent=self.user_agent[:500] if self.user_agent else None,
            )
        )
        logger.info(f"保管庫アクセス: action={action}, item_id={item_id}, user_id={user_id}")

    def access_log(self, item_id: str, user_id: str, limit: int = ACCESS_LOG_LIMIT) -> List[VaultAccessLog]:
        """アクセスログ（新しい順）。削除済みアイテムのログも参照できる"""
        return (
            self.db.query(VaultAccessLog)
            .filter(
                VaultAccessLog.vault_item_id == item_id,
                VaultAccessLog.user_id == user_id,
            )
            .order_by(VaultAccessLog.created_at.desc())
            .limit(limit)
            .all()
        )

    # ============================================
    # 操作
    # ============================================
    def view(self, item_id: str, user_id: str) -> VaultItem:
        item = self.get(item_id, user_id)
        now = utcnow()
        item.access_count = (item.access_count or 0) + 1
        item.last_accessed_at = now
        self._log(user_id, item.id, "view")
        return self._save(item)

    def _check_category(self, category_id: Optional[str], user_id: str) -> None:
        if category_id:
            VaultCategoryService(self.db).get(category_id, user_id)

    def create(self, user_id: str, data: dict) -> VaultItem:
        self._check_category(data.get("category_id"), user_id)
        item = VaultItem(user_id=user_id, **self._clean(data))
        self.db.add(item)
        self.db.flush()
        self._log(user_id, item.id, "create")
        return self._save(item)

    def update(self, resource_id: str, user_id: str, data: dict) -> VaultItem:
        self._check_category(data.get("category_id"), user_id)
        item = self.get(resource_id, user_id)
        self._apply(item, data)
        self._log(user_id, item.id, "edit")
        return self._save(item)

    def archive(self, resource_id: str, user_id: str) -> None:
        item = self.get(resource_id, user_id)
        item.is_archived = True
        item.updated_at = utcnow()
        self._log(user_id, item.id, "archive")
        self.db.commit()

    def delete(self, resource_id: str, user_id: str) -> None:
        item = self.get(resource_id, user_id)
        self._log(user_id, item.id, "delete")
        self.db.delete(item)
        self.db.commit()

    def toggle_favorite(self, item_id: str, user_id: str) -> VaultItem:
        item = self.get(item_id, user_id)
        item.is_favorite = not item.is_favorite
        item.updated_at = utcnow()
        return self._save(item)
