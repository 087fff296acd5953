# 說明：本模組彙整所有 schema 描述器，以同一個 SchemaContext 與型別登錄表建立整個應用程式的模型登錄表。
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, Mapping, Optional

from sqlalchemy import MetaData

from ..context import SchemaContext
from ..exceptions import ModelNotFoundError
from ..types import TypeRegistry, default_types
from .user import USER_COLUMN_ATTRIBUTES, USERS_TABLE, UserRecord, UserType, define_users

logger = logging.getLogger(__name__)

ModelDefiner = Callable[[SchemaContext, TypeRegistry], type]

MODEL_DEFINERS: Dict[str, ModelDefiner] = {
    "user": define_users,
}


class SchemaRegistry(Mapping[str, type]):
    """以模型名稱查詢映射類別的唯讀登錄表。"""

    def __init__(self, context: SchemaContext, models: Dict[str, type]) -> None:
        self.context = context
        self._models = dict(models)

    @property
    def metadata(self) -> MetaData:
        return self.context.metadata

    def __getitem__(self, name: str) -> type:
        try:
            return self._models[name]
        except KeyError:
            raise ModelNotFoundError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)


def build_schema(
    context: Optional[SchemaContext] = None,
    types: Optional[TypeRegistry] = None,
) -> SchemaRegistry:
    """呼叫每一個描述器並回傳彙整後的 SchemaRegistry。"""

    context = context if context is not None else SchemaContext()
    types = types if types is not None else default_types()

    models: Dict[str, type] = {}
    for name, definer in MODEL_DEFINERS.items():
        models[name] = definer(context, types)
    logger.debug("schema 建立完成：%s", ", ".join(context.tables))
    return SchemaRegistry(context, models)


__all__ = [
    "MODEL_DEFINERS",
    "SchemaRegistry",
    "build_schema",
    "USER_COLUMN_ATTRIBUTES",
    "USERS_TABLE",
    "UserRecord",
    "UserType",
    "define_users",
]
