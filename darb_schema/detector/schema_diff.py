# 說明：本模組透過 Alembic autogenerate 機制比對已註冊的資料表定義與實際資料庫 schema，提供變更摘要。
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from alembic.autogenerate.api import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import MetaData
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

# (操作名稱, 目標名稱)，例如 ("add_table", "users")、("modify_nullable", "users.email")
SchemaChange = Tuple[str, str]


@dataclass(slots=True)
class SchemaDiffReport:
    """記錄 schema 差異的摘要資訊。"""

    changes: List[SchemaChange] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    @property
    def operations(self) -> List[str]:
        return [f"{op} {target}" for op, target in self.changes]

    @property
    def added_tables(self) -> List[str]:
        return [target for op, target in self.changes if op == "add_table"]


class SchemaDiffDetector:
    """利用 Alembic autogenerate 比對 MetaData 與資料庫差異。"""

    def __init__(
        self,
        engine: Engine,
        metadata: MetaData,
        include_object: Optional[Callable[..., bool]] = None,
        compare_type: bool = False,
    ) -> None:
        if not metadata.tables:
            raise ValueError("SchemaDiffDetector 需要至少一個已註冊的資料表來比較。")
        self.engine = engine
        self.metadata = metadata
        self.include_object = include_object
        self.compare_type = compare_type

    def detect(self) -> SchemaDiffReport:
        with self.engine.connect() as connection:
            changes = self._collect_diffs(connection)
        logger.info("schema 比對完成，共 %d 項差異", len(changes))
        return SchemaDiffReport(changes=changes)

    def _collect_diffs(self, connection: Connection) -> List[SchemaChange]:
        context = MigrationContext.configure(
            connection,
            opts={
                "compare_type": self.compare_type,
                "compare_server_default": False,
                "include_object": self.include_object,
                "target_metadata": self.metadata,
            },
        )
        changes: List[SchemaChange] = []
        for diff in compare_metadata(context, self.metadata):
            # 欄位屬性變更會以多個 tuple 組成的 list 回傳
            items = diff if isinstance(diff, list) else [diff]
            changes.extend(self._describe(item) for item in items)
        return changes

    def _describe(self, diff: Tuple[Any, ...]) -> SchemaChange:
        op, *args = diff
        if op.startswith("modify_"):
            # (op, schema, table_name, column_name, ...)
            return op, f"{args[1]}.{args[2]}"
        if op in ("add_column", "remove_column"):
            # (op, schema, table_name, Column)
            return op, f"{args[1]}.{args[2].name}"
        target = next((arg for arg in args if hasattr(arg, "name")), None)
        if target is not None:
            return op, str(target.name)
        return op, " ".join(str(arg) for arg in args if arg is not None)
