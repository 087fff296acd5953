# 說明：本模組負責讀取並組態 darb_schema 所需的設定，包含資料庫連線、SQL echo 與是否自動建立資料表。
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field
from sqlalchemy import MetaData

DEFAULT_DATABASE_URL = "sqlite:///./darb.db"
DEFAULT_DIALECT = "postgresql"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class SchemaSettings(BaseModel):
    """套件的主設定，預設值可透過環境變數覆寫。"""

    database_url: str = Field(default_factory=lambda: os.getenv("DARB_DATABASE_URL", DEFAULT_DATABASE_URL))
    echo: bool = Field(default_factory=lambda: _env_flag("DARB_SQL_ECHO"))
    create_tables: bool = True
    dialect: str = DEFAULT_DIALECT


@dataclass(slots=True)
class LoadedConfig:
    """整合後可供核心流程使用的設定。"""

    database_url: str
    echo: bool
    create_tables: bool
    metadata: Optional[MetaData] = None

    def ensure_metadata(self) -> MetaData:
        if self.metadata is None or not self.metadata.tables:
            raise ValueError("未載入任何資料表定義，無法執行 schema 比對。")
        return self.metadata


def build_loaded_config(settings: SchemaSettings, metadata: Optional[MetaData] = None) -> LoadedConfig:
    """將 Pydantic 設定轉換為核心流程可用的結構，未提供 metadata 時建立完整 schema。"""

    if metadata is None:
        from .models import build_schema

        metadata = build_schema().metadata

    return LoadedConfig(
        database_url=settings.database_url,
        echo=settings.echo,
        create_tables=settings.create_tables,
        metadata=metadata,
    )
