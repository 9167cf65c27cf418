"""
ノートブックサービス（階層構造）
"""
from app.models.knowledge_base import Notebook
from app.services.base import TreeResourceService


class NotebookService(TreeResourceService):
    """ノートブックサービスクラス"""

    model = Notebook
    entity_name = "Notebook"
