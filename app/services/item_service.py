"""
持ち物サービス

保管場所の移動は履歴（item_location_history）に記録する
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import or_

from app.clock import utcnow
from app.errors import NotFoundError
from app.models.inventory import Item, ItemLocationHistory, ItemMaintenanceHistory
from app.services.base import OwnedResourceService, like_pattern
from app.services.location_service import LocationService

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


class ItemService(OwnedResourceService):
    """持ち物サービスクラス"""

    model = Item
    entity_name = "Item"

    def _by_name(self, query):
        return query.order_by(Item.name)

    def list_items(
        self,
        user_id: str,
        location_id: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Item]:
        query = self._active(user_id)
        if location_id:
            query = query.filter(Item.location_id == location_id)
        if category:
            query = query.filter(Item.category == category)
        if search:
            pattern = like_pattern(search)
            query = query.filter(
                or_(
                    Item.name.like(pattern),
                    Item.description.like(pattern),
                    Item.brand.like(pattern),
                    Item.model.like(pattern),
                    Item.search_keywords.like(pattern),
                )
            )
        return self._by_name(query).all()

    def _flagged(self, user_id: str, flag) -> List[Item]:
        return self._by_name(self._active(user_id).filter(flag.is_(True))).all()

    def list_favorites(self, user_id: str) -> List[Item]:
        return self._flagged(user_id, Item.is_favorite)

    def list_lost(self, user_id: str) -> List[Item]:
        return self._flagged(user_id, Item.is_lost)

    def list_broken(self, user_id: str) -> List[Item]:
        return self._flagged(user_id, Item.is_broken)

    def list_lent(self, user_id: str) -> List[Item]:
        return self._flagged(user_id, Item.is_lent)

    def find_by_barcode(self, barcode: str, user_id: str) -> Item:
        item = self._owned(user_id).filter(Item.barcode == barcode).first()
        if item is None:
            raise self._not_found()
        return item

    def find_by_custom_id(self, custom_id: str, user_id: str) -> Item:
        item = self._owned(user_id).filter(Item.custom_id == custom_id).first()
        if item is None:
            raise self._not_found()
        return item

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.entity_name} not found")

    def list_needing_maintenance(self, user_id: str) -> List[Item]:
        """メンテナンス予定日を過ぎた持ち物"""
        return (
            self._active(user_id)
            .filter(
                Item.next_maintenance_date.is_not(None),
                Item.next_maintenance_date <= utcnow(),
            )
            .order_by(Item.next_maintenance_date)
            .all()
        )

    def list_warranty_expiring(self, user_id: str, days: int = 30) -> List[Item]:
        now = utcnow()
        return (
            self._active(user_id)
            .filter(
                Item.warranty_expires_at.is_not(None),
                Item.warranty_expires_at >= now,
                Item.warranty_expires_at <= now + timedelta(days=days),
            )
            .order_by(Item.warranty_expires_at)
            .all()
        )

    # ============================================
    # 操作
    # ============================================
    def use(self, item_id: str, user_id: str) -> Item:
        """持ち物を取得し最終使用日時を更新"""
        item = self.get(item_id, user_id)
        item.last_used_at = utcnow()
        return self._save(item)

    def _check_location(self, location_id: Optional[str], user_id: str) -> None:
        if location_id:
            LocationService(self.db).get(location_id, user_id)

    def create(self, user_id: str, data: dict) -> Item:
        self._check_location(data.get("location_id"), user_id)
        return super().create(user_id, data)

    def update(self, resource_id: str, user_id: str, data: dict) -> Item:
        self._check_location(data.get("location_id"), user_id)
        return super().update(resource_id, user_id, data)

    def move(
        self,
        item_id: str,
        user_id: str,
        location_id: Optional[str],
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Item:
        """保管場所を移動し、履歴を記録"""
        item = self.get(item_id, user_id)
        self._check_location(location_id, user_id)

        self.db.add(
            ItemLocationHistory(
                item_id=item.id,
                from_location_id=item.location_id,
                to_location_id=location_id,
                reason=reason or "manual_move",
                notes=notes,
                moved_by="user",
            )
        )
        item.location_id = location_id
        item.updated_at = utcnow()
        logger.info(f"持ち物移動: item_id={item.id}, to={location_id}")
        return self._save(item)

    def _toggle(self, item_id: str, user_id: str, flag: str) -> Item:
        item = self.get(item_id, user_id)
        setattr(item, flag, not getattr(item, flag))
        item.updated_at = utcnow()
        return self._save(item)

    def toggle_favorite(self, item_id: str, user_id: str) -> Item:
        return self._toggle(item_id, user_id, "is_favorite")

    def toggle_lost(self, item_id: str, user_id: str) -> Item:
        return self._toggle(item_id, user_id, "is_lost")

    def toggle_broken(self, item_id: str, user_id: str) -> Item:
        return self._toggle(item_id, user_id, "is_broken")

    # ============================================
    # 履歴
    # ============================================
    def location_history(self, item_id: str, user_id: str, limit: int = HISTORY_LIMIT) -> List[ItemLocationHistory]:
        item = self.get(item_id, user_id)
        return (
            self.db.query(ItemLocationHistory)
            .filter(ItemLocationHistory.item_id == item.id)
            .order_by(ItemLocationHistory.moved_date.desc())
            .limit(limit)
            .all()
        )

    def maintenance_history(self, item_id: str, user_id: str) -> List[ItemMaintenanceHistory]:
        item = self.get(item_id, user_id)
        return (
            self.db.query(ItemMaintenanceHistory)
            .filter(ItemMaintenanceHistory.item_id == item.id)
            .order_by(ItemMaintenanceHistory.performed_at.desc())
            .all()
        )

    def add_maintenance(self, item_id: str, user_id: str, data: dict) -> ItemMaintenanceHistory:
        """メンテナンス記録を追加（次回予定日があれば持ち物にも反映）"""
        item = self.get(item_id, user_id)
        values = {k: v for k, v in data.items() if v is not None}
        record = ItemMaintenanceHistory(item_id=item.id, **values)
        self.db.add(record)

        next_due: Optional[datetime] = data.get("next_due_date")
        if next_due:
            item.next_maintenance_date = next_due
            item.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(record)
        return record
