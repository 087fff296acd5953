# 說明：本模組提供 SchemaContext，包裝 SQLAlchemy MetaData 與 ORM registry，作為描述器註冊模型的目標。
from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import MetaData
from sqlalchemy.orm import registry as orm_registry

NAMING_CONVENTION: Dict[str, str] = {
    "pk": "%(table_name)s_pkey",
    "uq": "%(table_name)s_%(column_0_name)s_key",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
}


class SchemaContext:
    """代表目標資料庫的 schema 容器。

    未提供 ``metadata`` 時會建立帶有命名規則的新 MetaData；未提供
    ``registry`` 時會建立綁定到該 MetaData 的 ORM registry。
    """

    def __init__(
        self,
        metadata: Optional[MetaData] = None,
        registry: Optional[orm_registry] = None,
    ) -> None:
        if metadata is None:
            metadata = registry.metadata if registry is not None else MetaData(naming_convention=NAMING_CONVENTION)
        self.metadata = metadata
        self.registry = registry if registry is not None else orm_registry(metadata=metadata)

    @property
    def tables(self) -> List[str]:
        return sorted(self.metadata.tables)

    def __repr__(self) -> str:
        return f"SchemaContext(tables={self.tables!r})"
