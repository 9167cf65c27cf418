"""
日記サービス
"""
from collections import Counter
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import or_

from app.clock import utcnow
from app.models.day_tracker import Journal
from app.services.base import OwnedResourceService, like_pattern


class JournalService(OwnedResourceService):
    """日記サービスクラス"""

    model = Journal
    entity_name = "Journal entry"

    def _newest_first(self, query):
        return query.order_by(Journal.date.desc())

    def list_journals(self, user_id: str, limit: int = 50, offset: int = 0) -> List[Journal]:
        return self._newest_first(self._owned(user_id)).offset(offset).limit(limit).all()

    def get_by_date(self, user_id: str, day: date) -> Optional[Journal]:
        """指定日（0:00〜23:59:59.999999）の日記を取得"""
        start = datetime.combine(day, time.min)
        end = datetime.combine(day, time.max)
        return (
            self._owned(user_id)
            .filter(Journal.date >= start, Journal.date <= end)
            .first()
        )

    def list_by_range(self, user_id: str, start: datetime, end: datetime) -> List[Journal]:
        return self._newest_first(
            self._owned(user_id).filter(Journal.date >= start, Journal.date <= end)
        ).all()

    def list_by_mood(self, user_id: str, mood: str) -> List[Journal]:
        return self._newest_first(self._owned(user_id).filter(Journal.mood == mood)).all()

    def list_recent(self, user_id: str, days: int = 7) -> List[Journal]:
        since = utcnow() - timedelta(days=days)
        return self._newest_first(self._owned(user_id).filter(Journal.date >= since)).all()

    def search(self, user_id: str, term: str) -> List[Journal]:
        """タイトル・本文・振り返りの部分一致検索"""
        pattern = like_pattern(term)
        return self._newest_first(
            self._owned(user_id).filter(
                or_(
                    Journal.title.like(pattern),
                    Journal.content.like(pattern),
                    Journal.reflections.like(pattern),
                )
            )
        ).all()

    def stats(self, user_id: str) -> dict:
        """
        日記の統計

        Returns:
            total_entries, average_energy_level, average_productivity_score, most_common_mood
        """
        entries = self._owned(user_id).all()
        energy = [e.energy_level for e in entries if e.energy_level is not None]
        productivity = [
            e.productivity_score for e in entries if e.productivity_score is not None
        ]
        moods = Counter(e.mood for e in entries if e.mood)

        return {
            "total_entries": len(entries),
            "average_energy_level": sum(energy) / len(energy) if energy else None,
            "average_productivity_score": (
                sum(productivity) / len(productivity) if productivity else None
            ),
            "most_common_mood": moods.most_common(1)[0][0] if moods else None,
        }
