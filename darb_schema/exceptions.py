# 說明：本模組定義 darb_schema 套件專用的例外類別，供驗證器、模型彙整與 DDL 產生流程使用。
from __future__ import annotations

from typing import Any, Sequence


class DarbSchemaError(Exception):
    """darb_schema 所有例外的基底類別。"""


class InvalidEmailError(DarbSchemaError, ValueError):
    """email 欄位不是語法正確的電子郵件地址。"""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"email 格式不正確：{value!r}")


class InvalidUserTypeError(DarbSchemaError, ValueError):
    """userType 欄位不在 founder / investor / admin 之中。"""

    def __init__(self, value: Any, allowed: Sequence[str] = ()) -> None:
        self.value = value
        self.allowed = list(allowed)
        super().__init__(f"不支援的使用者類型：{value!r}，可用值為 {', '.join(self.allowed)}")


class ModelNotFoundError(DarbSchemaError, KeyError):
    """在 SchemaRegistry 中找不到指定名稱的模型。"""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"找不到模型：{self.name}"


class UnsupportedDialectError(DarbSchemaError, ValueError):
    """DDL 產生時指定了不支援的 SQL 方言。"""

    def __init__(self, dialect: str, supported: Sequence[str] = ()) -> None:
        self.dialect = dialect
        self.supported = list(supported)
        super().__init__(f"不支援的 SQL 方言：{dialect}（可用：{', '.join(self.supported)}）")
