"""疎通確認コマンド"""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..api import Redmine, RedmineAPIError
from ..config import Config, load_config
from ..logging_setup import configure_logging

check_command = typer.Typer()
console = Console()


def _load_and_override_config(
    config_path: str | None, base_url: str | None, api_key: str | None
) -> Config:
    """設定を読み込み、コマンドライン引数で上書き"""
    config = load_config(config_path)

    if base_url:
        config.redmine.base_url = base_url
    if api_key:
        config.redmine.api_key = api_key

    configure_logging(config.log_level)
    return config


def _print_result_panel(message: str, success: bool) -> None:
    color = "green" if success else "red"
    mark = "✓" if success else "✗"
    console.print(
        Panel(
            f"[bold {color}]{mark} {message}[/bold {color}]",
            title="接続結果",
            border_style=color,
        )
    )


def _create_info_table(title: str, items: list, columns: list[dict[str, str]]) -> None:
    """情報テーブルを作成・表示する共通関数"""
    if not items:
        return

    table = Table(title=f"{title}一覧")
    for col in columns:
        table.add_column(col["name"], style=col.get("style", ""))

    for item in items:
        row = []
        for col in columns:
            value = item.get(col["key"], "")
            if col.get("transform"):
                value = col["transform"](value)
            row.append(str(value))
        table.add_row(*row)

    console.print(table)


def _handle_connection_error(error: Exception) -> None:
    """接続エラーを処理"""
    if isinstance(error, RedmineAPIError):
        message = f"API Error: {str(error)}"
    else:
        message = f"Unexpected Error: {str(error)}"
    _print_result_panel(message, success=False)
    raise typer.Exit(1) from error


@check_command.command("connection")
def check_connection(
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="設定ファイルのパス"
    ),
    base_url: str | None = typer.Option(None, "--url", help="Redmine ベースURL"),
    api_key: str | None = typer.Option(None, "--api-key", help="API キー"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="詳細な情報を表示"),
) -> None:
    """Redmine との疎通確認"""

    try:
        config = _load_and_override_config(config_path, base_url, api_key)
        console.print("[bold blue]Redmine 疎通確認[/bold blue]")
        console.print(f"URL: {config.redmine.base_url}")
        console.print(
            f"API Key: {'設定済み' if config.redmine.api_key else '未設定'}"
        )
        console.print()

        with Redmine(config) as redmine:
            result = redmine.test_connection()
    except Exception as e:
        _handle_connection_error(e)

    if not result["success"]:
        _print_result_panel(result["message"], success=False)
        raise typer.Exit(1)

    _print_result_panel(result["message"], success=True)
    console.print(f"\n[bold]プロジェクト数:[/bold] {result['projects_count']}")
    console.print(f"\n[bold]課題ステータス数:[/bold] {len(result['statuses'])}")

    if verbose:
        _create_info_table(
            "プロジェクト",
            result["projects"],
            [
                {"name": "ID", "key": "id", "style": "yellow"},
                {"name": "識別子", "key": "identifier", "style": "blue"},
                {"name": "名前", "key": "name", "style": "green"},
            ],
        )
        _create_info_table(
            "課題ステータス",
            result["statuses"],
            [
                {"name": "ID", "key": "id", "style": "yellow"},
                {"name": "名前", "key": "name", "style": "blue"},
                {
                    "name": "完了",
                    "key": "is_closed",
                    "style": "green",
                    "transform": lambda x: "✓" if x else "",
                },
            ],
        )


@check_command.command("config")
def check_config(
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="設定ファイルのパス"
    ),
) -> None:
    """設定ファイルの確認"""

    config = load_config(config_path)

    console.print("[bold blue]設定確認[/bold blue]")

    redmine_table = Table(title="Redmine 設定")
    redmine_table.add_column("項目", style="blue")
    redmine_table.add_column("値", style="green")

    redmine_table.add_row("Base URL", config.redmine.base_url)
    redmine_table.add_row("API Key", "設定済み" if config.redmine.api_key else "未設定")
    redmine_table.add_row("Timeout", f"{config.redmine.timeout_sec}秒")
    redmine_table.add_row("Log Level", config.log_level)

    console.print(redmine_table)
