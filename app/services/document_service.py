"""
ドキュメントサービス

ファイル本体は扱わず、メタデータと保存先パス（storage_path）のみを管理する
ファイル名または保存先が変わった更新は新しい版として version を進める
"""
import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import or_

from app.clock import utcnow
from app.models.document import Document, DocumentAccessLog
from app.services.base import OwnedResourceService, like_pattern
from app.services.document_category_service import DocumentCategoryService

logger = logging.getLogger(__name__)

ACCESS_LOG_LIMIT = 50
# 変更されると版が上がるカラム
VERSIONED_FIELDS = ("storage_path", "file_name")


class DocumentService(OwnedResourceService):
    """ドキュメントサービスクラス"""

    model = Document
    entity_name = "Document"

    def __init__(self, db, ip_address: Optional[str] = None, user_agent: Optional[str] = None):
        super().__init__(db)
        self.ip_address = ip_address
        self.user_agent = user_agent

    def _recent_first(self, query):
        return query.order_by(Document.updated_at.desc())

    def list_documents(
        self,
        user_id: str,
        category_id: Optional[str] = None,
        document_type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Document]:
        query = self._active(user_id)
        if category_id:
            query = query.filter(Document.category_id == category_id)
        if document_type:
            query = query.filter(Document.document_type == document_type)
        if search:
            pattern = like_pattern(search)
            query = query.filter(
                or_(
                    Document.title.like(pattern),
                    Document.description.like(pattern),
                    Document.file_name.like(pattern),
                    Document.searchable_content.like(pattern),
                )
            )
        return self._recent_first(query).all()

    def list_favorites(self, user_id: str) -> List[Document]:
        return self._recent_first(
            self._active(user_id).filter(Document.is_favorite.is_(True))
        ).all()

    def list_important(self, user_id: str) -> List[Document]:
        return self._recent_first(
            self._active(user_id).filter(Document.is_important.is_(True))
        ).all()

    def list_expiring(self, user_id: str, days: int = 30) -> List[Document]:
        now = utcnow()
        return (
            self._active(user_id)
            .filter(
                Document.expiration_date.is_not(None),
                Document.expiration_date >= now,
                Document.expiration_date <= now + timedelta(days=days),
            )
            .order_by(Document.expiration_date)
            .all()
        )

    # ============================================
    # アクセスログ
    # ============================================
    def _log(self, user_id: str, document_id: str, action: str) -> None:
        self.db.add(
            DocumentAccessLog(
                user_id=user_id,
                document_id=document_id,
                action=action,
                success=True,
                ip_address=self.ip_address,
                user_agent=self.user_agent[:500] if self.user_agent else None,
            )
        )
        logger.info(f"ドキュメントアクセス: action={action}, document_id={document_id}")

    def access_log(self, document_id: str, user_id: str, limit: int = ACCESS_LOG_LIMIT) -> List[DocumentAccessLog]:
        return (
            self.db.query(DocumentAccessLog)
            .filter(
                DocumentAccessLog.document_id == document_id,
                DocumentAccessLog.user_id == user_id,
            )
            .order_by(DocumentAccessLog.created_at.desc())
            .limit(limit)
            .all()
        )

    # ============================================
    # 操作
    # ============================================
    def view(self, document_id: str, user_id: str) -> Document:
        document = self.get(document_id, user_id)
        document.view_count = (document.view_count or 0) + 1
        document.last_accessed_at = utcnow()
        self._log(user_id, document.id, "view")
        return self._save(document)

    def _check_category(self, category_id: Optional[str], user_id: str) -> None:
        if category_id:
            DocumentCategoryService(self.db).get(category_id, user_id)

    def create(self, user_id: str, data: dict) -> Document:
        self._check_category(data.get("category_id"), user_id)
        document = Document(user_id=user_id, **self._clean(data))
        self.db.add(document)
        self.db.flush()
        self._log(user_id, document.id, "create")
        return self._save(document)

    def update(self, resource_id: str, user_id: str, data: dict) -> Document:
        self._check_category(data.get("category_id"), user_id)
        document = self.get(resource_id, user_id)
        new_version = any(
            field in data and data[field] != getattr(document, field)
            for field in VERSIONED_FIELDS
        )
        data = {k: v for k, v in data.items() if k != "version"}
        self._apply(document, data)
        if new_version:
            document.version = (document.version or 1) + 1
        self._log(user_id, document.id, "edit")
        return self._save(document)

    def archive(self, resource_id: str, user_id: str) -> None:
        document = self.get(resource_id, user_id)
        document.is_archived = True
        document.updated_at = utcnow()
        self._log(user_id, document.id, "archive")
        self.db.commit()

    def delete(self, resource_id: str, user_id: str) -> None:
        document = self.get(resource_id, user_id)
        self._log(user_id, document.id, "delete")
        self.db.delete(document)
        self.db.commit()

    def toggle_favorite(self, document_id: str, user_id: str) -> Document:
        document = self.get(document_id, user_id)
        document.is_favorite = not document.is_favorite
        document.updated_at = utcnow()
        return self._save(document)

    def toggle_important(self, document_id: str, user_id: str) -> Document:
        document = self.get(document_id, user_id)
        document.is_important = not document.is_important
        document.updated_at = utcnow()
        return self._save(document)

    def record_download(self, document_id: str, user_id: str) -> Document:
        """ダウンロード回数を記録（ファイル本体は保存先から取得する）"""
        document = self.get(document_id, user_id)
        document.download_count = (document.download_count or 0) + 1
        document.last_accessed_at = utcnow()
        self._log(user_id, document.id, "download")
        return self._save(document)
