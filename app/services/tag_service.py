"""
タグサービス

タグはユーザー毎に名前が一意。usage_count はノートへの付与数を表す
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import case, update
from sqlalchemy.exc import IntegrityError

from app.clock import utcnow
from app.errors import ConflictError
from app.models.knowledge_base import Note, NoteTag, Tag
from app.services.base import OwnedResourceService, like_pattern

logger = logging.getLogger(__name__)


class TagService(OwnedResourceService):
    """タグサービスクラス"""

    model = Tag
    entity_name = "Tag"

    def list_tags(self, user_id: str, search: Optional[str] = None) -> List[Tag]:
        """タグ一覧（使用回数の多い順、同数は名前順）"""
        query = self._owned(user_id)
        if search:
            query = query.filter(Tag.name.like(like_pattern(search)))
        return query.order_by(Tag.usage_count.desc(), Tag.name).all()

    def list_popular(self, user_id: str, limit: int = 10) -> List[Tag]:
        return self._owned(user_id).order_by(Tag.usage_count.desc()).limit(limit).all()

    def get_by_name(self, name: str, user_id: str) -> Optional[Tag]:
        return self._owned(user_id).filter(Tag.name == name).first()

    def create(self, user_id: str, data: dict) -> Tag:
        if self.get_by_name(data["name"], user_id):
            raise ConflictError("Tag with this name already exists")
        try:
            return super().create(user_id, data)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Tag with this name already exists")

    def update(self, resource_id: str, user_id: str, data: dict) -> Tag:
        name = data.get("name")
        if name:
            existing = self.get_by_name(name, user_id)
            if existing and existing.id != resource_id:
                raise ConflictError("Tag with this name already exists")
        return super().update(resource_id, user_id, data)

    def find_or_create(self, name: str, user_id: str) -> Tag:
        """名前でタグを取得、なければ作成（コミットはしない）"""
        tag = self.get_by_name(name, user_id)
        if tag is None:
            tag = Tag(user_id=user_id, name=name, usage_count=0)
            self.db.add(tag)
            self.db.flush()
        return tag

    # ============================================
    # ノートとの関連付け
    # ============================================
    def tags_for_note(self, note_id: str) -> List[Tag]:
        return (
            self.db.query(Tag)
            .join(NoteTag, NoteTag.tag_id == Tag.id)
            .filter(NoteTag.note_id == note_id)
            .order_by(Tag.name)
            .all()
        )

    def add_tag_to_note(self, note_id: str, tag_id: str, commit: bool = True) -> bool:
        """ノートにタグを付与（既に付与済みなら何もしない）"""
        exists = (
            self.db.query(NoteTag)
            .filter(NoteTag.note_id == note_id, NoteTag.tag_id == tag_id)
            .first()
        )
        if exists:
            return False
        self.db.add(NoteTag(note_id=note_id, tag_id=tag_id))
        self.db.execute(
            update(Tag)
            .where(Tag.id == tag_id)
            .values(usage_count=Tag.usage_count + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if commit:
            self.db.commit()
        return True

    def remove_tag_from_note(self, note_id: str, tag_id: str, commit: bool = True) -> bool:
        """ノートからタグを外す（usage_count は0未満にしない）"""
        deleted = (
            self.db.query(NoteTag)
            .filter(NoteTag.note_id == note_id, NoteTag.tag_id == tag_id)
            .delete(synchronize_session=False)
        )
        if deleted:
            self.db.execute(
                update(Tag)
                .where(Tag.id == tag_id)
                .values(
                    usage_count=case(
                        (Tag.usage_count > 0, Tag.usage_count - 1), else_=0
                    ),
                    updated_at=utcnow(),
                )
                .execution_options(synchronize_session=False)
            )
        if commit:
            self.db.commit()
        return bool(deleted)

    def set_note_tags(self, note: Note, names: Iterable[str]) -> List[Tag]:
        """
        ノートのタグを名前リストで置き換える（コミットは呼び出し側）

        存在しないタグは作成する
        """
        wanted = {}
        for name in names:
            name = name.strip()
            if name and name not in wanted:
                wanted[name] = self.find_or_create(name, note.user_id)

        current = {tag.id: tag for tag in self.tags_for_note(note.id)}
        wanted_ids = {tag.id for tag in wanted.values()}

        for tag_id in current.keys() - wanted_ids:
            self.remove_tag_from_note(note.id, tag_id, commit=False)
        for tag in wanted.values():
            if tag.id not in current:
                self.add_tag_to_note(note.id, tag.id, commit=False)
        self.db.flush()
        return list(wanted.values())
