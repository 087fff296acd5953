# 說明：本測試設定檔建立臨時 SQLite 資料庫與全新的 users schema，供各項功能測試共用。
from __future__ import annotations

from pathlib import Path
import sys
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from darb_schema.models import SchemaRegistry, build_schema


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'darb.db'}"


@pytest.fixture()
def schema() -> SchemaRegistry:
    """每個測試都使用獨立的 SchemaContext，避免映射狀態互相影響。"""

    return build_schema()


@pytest.fixture()
def engine(schema: SchemaRegistry, database_url: str) -> Iterator[Engine]:
    engine = create_engine(database_url, future=True)
    schema.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session
