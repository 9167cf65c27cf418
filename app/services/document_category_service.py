"""
ドキュメントカテゴリサービス（階層構造）
"""
from app.models.document import DocumentCategory
from app.services.base import TreeResourceService


class DocumentCategoryService(TreeResourceService):
    """ドキュメントカテゴリサービスクラス"""

    model = DocumentCategory
    entity_name = "Document category"
