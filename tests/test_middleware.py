# 說明：本測試驗證 SchemaInitMiddleware 會在第一個請求前建立資料表、只執行一次，並把結果保存在 app.state。
from __future__ import annotations

import logging

from sqlalchemy import create_engine, inspect
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from darb_schema import middleware as middleware_module
from darb_schema.middleware import SchemaInitMiddleware


async def _schema_status(request):
    result = request.app.state.schema_init_result
    return JSONResponse(
        {
            "created_tables": result.created_tables,
            "has_changes": result.schema_diff_report.has_changes,
        }
    )


def _build_app(**init_kwargs) -> Starlette:
    app = Starlette(routes=[Route("/schema", _schema_status)])
    app.add_middleware(SchemaInitMiddleware, **init_kwargs)
    return app


def test_middleware_initializes_schema_once(database_url: str, monkeypatch, caplog) -> None:
    calls = []
    original_init_db = middleware_module.init_db

    async def counting_init_db(**kwargs):
        calls.append(kwargs)
        return await original_init_db(**kwargs)

    monkeypatch.setattr(middleware_module, "init_db", counting_init_db)
    caplog.set_level(logging.INFO, logger="darb_schema.middleware")

    with TestClient(_build_app(database_url=database_url)) as client:
        first = client.get("/schema").json()
        second = client.get("/schema").json()

    assert calls == [{"database_url": database_url}]
    assert first == {"created_tables": ["users"], "has_changes": True}
    assert second == first
    assert any("users" in record.getMessage() for record in caplog.records)

    engine = create_engine(database_url, future=True)
    try:
        assert "users" in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_middleware_check_only_reports_pending_changes(database_url: str) -> None:
    with TestClient(_build_app(database_url=database_url, create_tables=False)) as client:
        body = client.get("/schema").json()

    assert body == {"created_tables": [], "has_changes": True}

    engine = create_engine(database_url, future=True)
    try:
        assert "users" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
