"""
ノートサービス

本文の更新時に文字数（単語数）と読了時間を再計算する
"""
import logging
import math
from typing import List, Optional

from sqlalchemy import or_

from app.clock import utcnow
from app.models.knowledge_base import Note, NoteTag
from app.services.base import OwnedResourceService, like_pattern
from app.services.notebook_service import NotebookService
from app.services.tag_service import TagService

logger = logging.getLogger(__name__)

# 1分あたりに読める単語数
WORDS_PER_MINUTE = 200


def count_words(content: Optional[str]) -> int:
    return len(content.split()) if content else 0


def reading_time(word_count: int) -> int:
    """読了時間（分、切り上げ）"""
    return math.ceil(word_count / WORDS_PER_MINUTE)


class NoteService(OwnedResourceService):
    """ノートサービスクラス"""

    model = Note
    entity_name = "Note"

    def _recent_first(self, query):
        return query.order_by(Note.is_pinned.desc(), Note.updated_at.desc())

    def list_notes(
        self,
        user_id: str,
        notebook_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Note]:
        query = self._active(user_id)
        if notebook_id:
            query = query.filter(Note.notebook_id == notebook_id)
        if search:
            pattern = like_pattern(search)
            query = query.filter(
                or_(
                    Note.title.like(pattern),
                    Note.content.like(pattern),
                    Note.excerpt.like(pattern),
                )
            )
        return self._recent_first(query).all()

    def list_favorites(self, user_id: str) -> List[Note]:
        return self._recent_first(
            self._active(user_id).filter(Note.is_favorite.is_(True))
        ).all()

    def list_pinned(self, user_id: str) -> List[Note]:
        return (
            self._active(user_id)
            .filter(Note.is_pinned.is_(True))
            .order_by(Note.updated_at.desc())
            .all()
        )

    def list_by_tag(self, tag_id: str, user_id: str) -> List[Note]:
        """タグが付いたノート（タグは自分のもののみ）"""
        TagService(self.db).get(tag_id, user_id)
        return self._recent_first(
            self._active(user_id)
            .join(NoteTag, NoteTag.note_id == Note.id)
            .filter(NoteTag.tag_id == tag_id)
        ).all()

    def view(self, note_id: str, user_id: str) -> Note:
        """ノートを取得し閲覧回数を記録"""
        note = self.get(note_id, user_id)
        note.view_count = (note.view_count or 0) + 1
        note.last_viewed_at = utcnow()
        return self._save(note)

    def _check_notebook(self, notebook_id: Optional[str], user_id: str) -> None:
        if notebook_id:
            NotebookService(self.db).get(notebook_id, user_id)

    def _with_counts(self, data: dict) -> dict:
        if "content" in data:
            words = count_words(data["content"])
            data = {**data, "word_count": words, "reading_time": reading_time(words)}
        return data

    def create_note(self, user_id: str, data: dict, tags: Optional[List[str]] = None) -> Note:
        self._check_notebook(data.get("notebook_id"), user_id)
        note = Note(user_id=user_id, **self._clean(self._with_counts(data)))
        self.db.add(note)
        self.db.flush()
        if tags:
            TagService(self.db).set_note_tags(note, tags)
        self.db.commit()
        self.db.refresh(note)
        logger.info(f"ノート作成: id={note.id}, user_id={user_id}")
        return note

    def update_note(
        self,
        note_id: str,
        user_id: str,
        data: dict,
        tags: Optional[List[str]] = None,
    ) -> Note:
        """ノートを更新（tags が None の場合はタグを変更しない）"""
        note = self.get(note_id, user_id)
        self._check_notebook(data.get("notebook_id"), user_id)
        self._apply(note, self._with_counts(data))
        if tags is not None:
            TagService(self.db).set_note_tags(note, tags)
        return self._save(note)

    def toggle_favorite(self, note_id: str, user_id: str) -> Note:
        note = self.get(note_id, user_id)
        note.is_favorite = not note.is_favorite
        note.updated_at = utcnow()
        return self._save(note)

    def toggle_pin(self, note_id: str, user_id: str) -> Note:
        note = self.get(note_id, user_id)
        note.is_pinned = not note.is_pinned
        note.updated_at = utcnow()
        return self._save(note)
