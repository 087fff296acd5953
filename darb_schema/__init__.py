# 說明：本模組提供對外匯出的主要 API，包括 users schema 描述器、模型彙整、init_db 與 middleware。
from .context import SchemaContext
from .core import InitDBResult, init_db
from .ddl import render_ddl
from .middleware import SchemaInitMiddleware
from .models import SchemaRegistry, UserType, build_schema, define_users
from .types import TypeRegistry, default_types

__version__ = "0.1.0"

__all__ = [
    "InitDBResult",
    "SchemaContext",
    "SchemaInitMiddleware",
    "SchemaRegistry",
    "TypeRegistry",
    "UserType",
    "build_schema",
    "default_types",
    "define_users",
    "init_db",
    "render_ddl",
]
