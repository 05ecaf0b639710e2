"""CLI エントリーポイント"""

import typer  # pragma: no cover

from .commands.check import check_command  # pragma: no cover
from .commands.fetch import fetch  # pragma: no cover

app = typer.Typer(help="Redmine REST API クライアント CLI")  # pragma: no cover

# サブコマンドを追加
app.add_typer(
    check_command, name="check", help="Redmineとの疎通確認"
)  # pragma: no cover
app.command("fetch")(fetch)  # pragma: no cover


def main_entry() -> None:  # pragma: no cover
    """メインエントリーポイント"""
    app()  # pragma: no cover


if __name__ == "__main__":  # pragma: no cover
    main_entry()  # pragma: no cover
