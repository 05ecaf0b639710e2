"""エンドポイント取得コマンド"""

import typer
from rich.console import Console
from rich.panel import Panel

from ..api import AbstractApi, DecodeError, RedmineAPIError, RedmineClient
from ..config import load_config
from ..logging_setup import configure_logging

console = Console()


def _parse_params(raw_params: list[str]) -> dict[str, object]:
    """``key=value`` 形式の引数を辞書に変換 (同じキーは配列になる)"""
    params: dict[str, object] = {}
    for raw in raw_params:
        if "=" not in raw:
            raise typer.BadParameter(f"key=value 形式で指定してください: {raw}")
        key, value = raw.split("=", 1)
        if key in params:
            existing = params[key]
            params[key] = (existing if isinstance(existing, list) else [existing]) + [
                value
            ]
        else:
            params[key] = value
    return params


def fetch(
    endpoint: str = typer.Argument(..., help="取得するエンドポイント (例: /issues.json)"),
    limit: int = typer.Option(25, "--limit", "-l", help="取得件数"),
    offset: int = typer.Option(0, "--offset", "-o", help="取得開始位置"),
    param: list[str] = typer.Option(
        [], "--param", "-p", help="追加のクエリパラメータ (key=value)"
    ),
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="設定ファイルのパス"
    ),
) -> None:
    """エンドポイントの結果をページングしながら取得して JSON で表示"""
    params = _parse_params(param)
    params["limit"] = limit
    params["offset"] = offset

    try:
        config = load_config(config_path)
        configure_logging(config.log_level)

        with RedmineClient(config) as client:
            api = AbstractApi(client)
            result = api.retrieve_all(endpoint, params)
    except Exception as e:
        label = "API Error" if isinstance(e, RedmineAPIError) else "Unexpected Error"
        console.print(
            Panel(
                f"[bold red]✗ {label}: {str(e)}[/bold red]",
                title="取得結果",
                border_style="red",
            )
        )
        raise typer.Exit(1) from e

    if api.last_response is not None and api.last_call_failed():
        console.print(
            f"[bold red]✗ HTTP {api.last_response.status_code}[/bold red]"
        )
        raise typer.Exit(1)

    if isinstance(result, DecodeError):
        console.print(f"[bold red]{result}[/bold red]")
        raise typer.Exit(1)

    console.print_json(data=result)
