# 說明：本模組提供 Starlette / FastAPI 專用的 middleware，於應用第一個請求前建立 users 等資料表，並把結果保存在 app.state。
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .core import InitDBResult, init_db

logger = logging.getLogger(__name__)

STATE_KEY = "schema_init_result"


class SchemaInitMiddleware(BaseHTTPMiddleware):
    """第一個請求進來時執行 init_db。

    執行結果會存到 ``request.app.state.schema_init_result``，路由可以藉此回報
    schema 狀態；``init_kwargs`` 原樣傳給 :func:`init_db`。init_db 失敗時例外
    直接拋出，下一個請求會再重試。
    """

    def __init__(self, app: ASGIApp, **init_kwargs: Any) -> None:
        super().__init__(app)
        self.init_kwargs = init_kwargs
        self.result: Optional[InitDBResult] = None
        self._lock = asyncio.Lock()

    async def _ensure_schema(self) -> InitDBResult:
        async with self._lock:
            if self.result is None:
                result = await init_db(**self.init_kwargs)
                if result.created_tables:
                    logger.info("首次請求前已建立資料表：%s", ", ".join(result.created_tables))
                elif result.schema_diff_report.has_changes:
                    logger.warning(
                        "資料庫 schema 與定義不一致：%s",
                        "; ".join(result.schema_diff_report.operations),
                    )
                self.result = result
        return self.result

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        result = self.result if self.result is not None else await self._ensure_schema()
        setattr(request.app.state, STATE_KEY, result)
        return await call_next(request)
