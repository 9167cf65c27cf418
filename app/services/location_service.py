"""
保管場所サービス（階層構造: 部屋 > 棚 > 箱 など）
"""
from typing import List, Optional

from app.models.inventory import Location
from app.services.base import TreeResourceService


class LocationService(TreeResourceService):
    """保管場所サービスクラス"""

    model = Location
    entity_name = "Location"

    def list_locations(self, user_id: str, location_type: Optional[str] = None) -> List[Location]:
        query = self._active(user_id)
        if location_type:
            query = query.filter(Location.location_type == location_type)
        return self._ordered(query).all()
