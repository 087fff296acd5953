# 說明：本模組定義描述器使用的型別登錄表（type registry），預設對應到 SQLAlchemy 的欄位型別。
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.types import TypeEngine

TypeFactory = Callable[..., TypeEngine[Any]]


@dataclass(frozen=True)
class TypeRegistry:
    """欄位型別目錄，描述器只透過這些工廠建立欄位型別。"""

    STRING: TypeFactory = String
    TEXT: TypeFactory = Text
    INTEGER: TypeFactory = Integer
    BOOLEAN: TypeFactory = Boolean
    DATE: TypeFactory = DateTime
    ENUM: TypeFactory = Enum


def default_types() -> TypeRegistry:
    return TypeRegistry()
