# 說明：本模組將已註冊的資料表定義編譯成指定 SQL 方言的 DDL 敘述，方便檢視或交付 DBA。
from __future__ import annotations

from typing import Callable, Dict, List

from sqlalchemy import Enum, MetaData
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateIndex, CreateTable

from .exceptions import UnsupportedDialectError

DIALECTS: Dict[str, Callable[[], Dialect]] = {
    "postgresql": postgresql.dialect,
    "mysql": mysql.dialect,
    "sqlite": sqlite.dialect,
}


def _render_enum_types(metadata: MetaData, dialect: Dialect) -> List[str]:
    # PostgreSQL 的具名 enum 需要在 CREATE TABLE 之前先建立型別
    statements: List[str] = []
    seen = set()
    preparer = dialect.identifier_preparer
    for table in metadata.sorted_tables:
        for column in table.columns:
            enum_type = column.type
            if not isinstance(enum_type, Enum) or not enum_type.name or enum_type.name in seen:
                continue
            seen.add(enum_type.name)
            values = ", ".join(f"'{value}'" for value in enum_type.enums)
            statements.append(f"CREATE TYPE {preparer.quote(enum_type.name)} AS ENUM ({values})")
    return statements


def render_ddl(metadata: MetaData, dialect: str = "postgresql") -> List[str]:
    """回傳每個資料表的 CREATE TABLE 與其 CREATE INDEX 敘述。"""

    factory = DIALECTS.get(dialect)
    if factory is None:
        raise UnsupportedDialectError(dialect, sorted(DIALECTS))
    target = factory()

    statements: List[str] = []
    if dialect == "postgresql":
        statements.extend(_render_enum_types(metadata, target))
    for table in metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=target)).strip())
        for index in sorted(table.indexes, key=lambda ix: ix.name or ""):
            statements.append(str(CreateIndex(index).compile(dialect=target)).strip())
    return statements
