# 說明：本模組實作 init_db 核心流程，於應用程式啟動時比對 users 等資料表定義與資料庫，並視需要建立缺少的資料表。
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import MetaData, create_engine, inspect

from .config import LoadedConfig, SchemaSettings, build_loaded_config
from .detector.schema_diff import SchemaDiffDetector, SchemaDiffReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InitDBResult:
    """彙整 init_db 的執行結果。"""

    schema_diff_report: SchemaDiffReport
    created_tables: List[str] = field(default_factory=list)


async def init_db(
    database_url: Optional[str] = None,
    metadata: Optional[MetaData] = None,
    create_tables: bool = True,
    echo: Optional[bool] = None,
) -> InitDBResult:
    """
    應用程式啟動時呼叫的主要入口，比對 schema 並可自動建立缺少的資料表。
    """

    overrides: Dict[str, Any] = {"create_tables": create_tables}
    if database_url is not None:
        overrides["database_url"] = database_url
    if echo is not None:
        overrides["echo"] = echo

    loaded_config = build_loaded_config(SchemaSettings(**overrides), metadata)
    loaded_config.ensure_metadata()

    return await asyncio.to_thread(_init_db_sync, loaded_config)


def _init_db_sync(loaded_config: LoadedConfig) -> InitDBResult:
    metadata = loaded_config.ensure_metadata()
    engine = create_engine(loaded_config.database_url, echo=loaded_config.echo, future=True)
    try:
        schema_diff_report = SchemaDiffDetector(engine, metadata).detect()

        created_tables: List[str] = []
        if loaded_config.create_tables and schema_diff_report.has_changes:
            existing = set(inspect(engine).get_table_names())
            metadata.create_all(engine)
            created_tables = [table.name for table in metadata.sorted_tables if table.name not in existing]
            if created_tables:
                logger.info("已建立資料表：%s", ", ".join(created_tables))
    finally:
        engine.dispose()

    return InitDBResult(
        schema_diff_report=schema_diff_report,
        created_tables=created_tables,
    )
