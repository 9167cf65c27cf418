"""
貸出サービス

貸出の作成・返却・紛失に合わせて持ち物の is_lent / is_lost を更新する
延滞チェック（check_overdue）は呼び出し時にのみ実行する（定期実行は行わない）
"""
import logging
from typing import List, Optional

from sqlalchemy import or_

from app.clock import utcnow
from app.models.inventory import Item, Lending
from app.services.base import OwnedResourceService, like_pattern
from app.services.item_service import ItemService

logger = logging.getLogger(__name__)

LENDING_STATUSES = ("active", "returned", "overdue", "lost")
# 持ち物がまだ手元に戻っていない状態
OUTSTANDING_STATUSES = ("active", "overdue")


class LendingService(OwnedResourceService):
    """貸出サービスクラス"""

    model = Lending
    entity_name = "Lending record"

    def _newest_first(self, query):
        return query.order_by(Lending.lent_date.desc())

    def list_lendings(
        self,
        user_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Lending]:
        query = self._owned(user_id)
        if status:
            query = query.filter(Lending.status == status)
        if search:
            pattern = like_pattern(search)
            query = query.filter(
                or_(
                    Lending.borrower_name.like(pattern),
                    Lending.borrower_email.like(pattern),
                    Lending.purpose.like(pattern),
                    Lending.notes.like(pattern),
                )
            )
        return self._newest_first(query).all()

    def list_active(self, user_id: str) -> List[Lending]:
        return self.list_lendings(user_id, status="active")

    def list_overdue(self, user_id: str) -> List[Lending]:
        return self.list_lendings(user_id, status="overdue")

    def list_for_item(self, item_id: str, user_id: str) -> List[Lending]:
        ItemService(self.db).get(item_id, user_id)
        return self._newest_first(self._owned(user_id).filter(Lending.item_id == item_id)).all()

    def _item(self, lending: Lending) -> Optional[Item]:
        return self.db.query(Item).filter(Item.id == lending.item_id).first()

    def _set_item_flags(self, lending: Lending, **flags) -> None:
        item = self._item(lending)
        if item is None:
            return
        for key, value in flags.items():
            setattr(item, key, value)
        item.updated_at = utcnow()

    # ============================================
    # 操作
    # ============================================
    def create(self, user_id: str, data: dict) -> Lending:
        """貸出を記録（持ち物は自分のもののみ）"""
        item = ItemService(self.db).get(data["item_id"], user_id)
        values = {k: v for k, v in self._clean(data).items() if v is not None}
        lending = Lending(user_id=user_id, **values)
        self.db.add(lending)
        item.is_lent = True
        item.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(lending)
        logger.info(f"貸出記録: lending_id={lending.id}, item_id={item.id}")
        return lending

    def update(self, resource_id: str, user_id: str, data: dict) -> Lending:
        # 貸出対象の持ち物は変更できない
        data = {k: v for k, v in data.items() if k != "item_id"}
        return super().update(resource_id, user_id, data)

    def return_item(
        self,
        lending_id: str,
        user_id: str,
        condition_when_returned: Optional[str] = None,
        damage_notes: Optional[str] = None,
    ) -> Lending:
        lending = self.get(lending_id, user_id)
        now = utcnow()
        lending.status = "returned"
        lending.actual_return_date = now
        lending.is_overdue = False
        if condition_when_returned is not None:
            lending.condition_when_returned = condition_when_returned
        if damage_notes is not None:
            lending.damage_notes = damage_notes
        lending.updated_at = now
        self._set_item_flags(lending, is_lent=False)
        return self._save(lending)

    def mark_overdue(self, lending_id: str, user_id: str) -> Lending:
        lending = self.get(lending_id, user_id)
        lending.status = "overdue"
        lending.is_overdue = True
        lending.updated_at = utcnow()
        return self._save(lending)

    def mark_lost(self, lending_id: str, user_id: str) -> Lending:
        lending = self.get(lending_id, user_id)
        lending.status = "lost"
        lending.updated_at = utcnow()
        self._set_item_flags(lending, is_lost=True, is_lent=False)
        return self._save(lending)

    def send_reminder(self, lending_id: str, user_id: str) -> Lending:
        """リマインダー送信済みとして記録（通知の送信自体は行わない）"""
        lending = self.get(lending_id, user_id)
        now = utcnow()
        lending.reminder_sent = True
        lending.last_reminder_date = now
        lending.updated_at = now
        return self._save(lending)

    def delete(self, resource_id: str, user_id: str) -> None:
        lending = self.get(resource_id, user_id)
        if lending.status in OUTSTANDING_STATUSES:
            self._set_item_flags(lending, is_lent=False)
        self.db.delete(lending)
        self.db.commit()

    def stats(self, user_id: str) -> dict:
        lendings = self._owned(user_id).all()
        counts = {status: 0 for status in LENDING_STATUSES}
        for lending in lendings:
            if lending.status in counts:
                counts[lending.status] += 1
        return {"total": len(lendings), **counts}

    def check_overdue(self, user_id: Optional[str] = None) -> List[Lending]:
        """
        返却予定日を過ぎた貸出中の記録を延滞にする

        user_id を省略すると全ユーザーが対象。延滞にした記録を返す
        """
        query = self.db.query(Lending).filter(
            Lending.status == "active",
            Lending.expected_return_date.is_not(None),
            Lending.expected_return_date < utcnow(),
        )
        if user_id:
            query = query.filter(Lending.user_id == user_id)

        overdue = query.all()
        now = utcnow()
        for lending in overdue:
            lending.status = "overdue"
            lending.is_overdue = True
            lending.updated_at = now
        self.db.commit()

        if overdue:
            logger.info(f"延滞貸出を検出: {len(overdue)}件")
        return overdue
