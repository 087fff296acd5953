# 說明：匯出 schema 比對相關的公開介面，方便外部模組引用。
from .schema_diff import SchemaDiffDetector, SchemaDiffReport

__all__ = [
    "SchemaDiffDetector",
    "SchemaDiffReport",
]
