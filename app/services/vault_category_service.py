"""
保管庫カテゴリサービス
"""
from typing import List

from app.models.vault import VaultCategory
from app.services.base import OwnedResourceService


class VaultCategoryService(OwnedResourceService):
    """保管庫カテゴリサービスクラス"""

    model = VaultCategory
    entity_name = "Vault category"

    def list_categories(self, user_id: str) -> List[VaultCategory]:
        return self._ordered(self._active(user_id)).all()
