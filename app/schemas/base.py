"""Base schema"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    全スキーマ共通の基底クラス

    JSONのキーは camelCase（snake_case での入力も受け付ける）
    ORMオブジェクトからの変換に対応
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
