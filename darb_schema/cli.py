# 說明：本模組提供命令列介面，方便透過 CLI 檢視 users schema、輸出 DDL，以及比對或同步資料庫。
from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import DEFAULT_DIALECT
from .core import InitDBResult, init_db
from .ddl import DIALECTS, render_ddl
from .exceptions import UnsupportedDialectError
from .models import build_schema

app = typer.Typer(help="darb-schema CLI 工具")
console = Console()


def _render_result(result: InitDBResult) -> None:
    table = Table(title="darb-schema 檢查摘要")
    table.add_column("項目")
    table.add_column("狀態 / 詳細資訊")

    report = result.schema_diff_report
    if report.has_changes:
        diff_preview = "\n".join(report.operations[:5])
        table.add_row("Schema 差異", diff_preview or "有差異")
    else:
        table.add_row("Schema 差異", "無")

    if result.created_tables:
        table.add_row("已建立資料表", ", ".join(result.created_tables))
    console.print(table)


def _run_init_db(database_url: Optional[str], create_tables: bool) -> InitDBResult:
    return asyncio.run(init_db(database_url=database_url, create_tables=create_tables))


@app.command()
def describe() -> None:
    """列出所有已註冊資料表的欄位與索引。"""

    schema = build_schema()
    for sa_table in schema.metadata.sorted_tables:
        columns = Table(title=f"資料表 {sa_table.name}")
        columns.add_column("欄位")
        columns.add_column("型別")
        columns.add_column("可為空")
        columns.add_column("預設值")
        for column in sa_table.columns:
            default = ""
            if column.default is not None and getattr(column.default, "is_scalar", False):
                default = repr(column.default.arg)
            elif column.default is not None:
                default = "自動"
            columns.add_row(column.name, str(column.type), "是" if column.nullable else "否", default)
        console.print(columns)

        indexes = Table(title=f"{sa_table.name} 索引")
        indexes.add_column("名稱")
        indexes.add_column("欄位")
        indexes.add_column("唯一")
        for index in sorted(sa_table.indexes, key=lambda ix: ix.name or ""):
            indexes.add_row(
                index.name or "",
                ", ".join(column.name for column in index.columns),
                "是" if index.unique else "否",
            )
        console.print(indexes)


@app.command()
def ddl(
    dialect: str = typer.Option(
        DEFAULT_DIALECT, "--dialect", "-d", help=f"SQL 方言（{', '.join(sorted(DIALECTS))}）"
    ),
) -> None:
    """輸出建立資料表與索引的 DDL。"""

    schema = build_schema()
    try:
        statements = render_ddl(schema.metadata, dialect)
    except UnsupportedDialectError as exc:
        raise typer.BadParameter(str(exc), param_hint="--dialect") from exc
    for statement in statements:
        typer.echo(f"{statement};\n")


@app.command()
def check(
    url: Optional[str] = typer.Option(None, "--url", help="資料庫連線 URL，預設讀取 DARB_DATABASE_URL"),
) -> None:
    """僅比對資料庫狀態，不建立資料表。"""

    result = _run_init_db(url, create_tables=False)
    _render_result(result)
    if result.schema_diff_report.has_changes:
        raise typer.Exit(code=1)


@app.command()
def sync(
    url: Optional[str] = typer.Option(None, "--url", help="資料庫連線 URL，預設讀取 DARB_DATABASE_URL"),
) -> None:
    """比對資料庫並建立缺少的資料表。"""

    result = _run_init_db(url, create_tables=True)
    _render_result(result)


if __name__ == "__main__":
    app()
