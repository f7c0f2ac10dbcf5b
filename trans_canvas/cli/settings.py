# trans_canvas/cli/settings.py
"""读取和修改用户设置的 CLI 命令。"""

from enum import Enum
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from trans_canvas.core.exceptions import ConfigurationError
from trans_canvas.settings import (
    JsonFileSettingsStore,
    SettingKey,
    read_setting,
    write_setting,
)

from .state import State

console = Console()
settings_app = typer.Typer(help="读取和修改跨会话保存的用户设置。")


def _display(value: object) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


@settings_app.command("get")
def settings_get(
    ctx: typer.Context,
    key: Annotated[
        str | None, typer.Argument(help="设置项名称；省略时列出全部设置。")
    ] = None,
) -> None:
    """读取设置项。"""
    state: State = ctx.obj
    store = JsonFileSettingsStore(state.settings_file)
    keys = [key] if key else [member.value for member in SettingKey]

    table = Table(show_header=False, box=None)
    table.add_column(style="cyan")
    table.add_column(style="bright_white")
    try:
        for name in keys:
            table.add_row(name, _display(read_setting(store, name)))
    except ConfigurationError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise typer.Exit(code=1) from e
    console.print(table)


@settings_app.command("set")
def settings_set(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="设置项名称，例如 targetLanguage。")],
    value: Annotated[str, typer.Argument(help="新的取值。")],
) -> None:
    """修改设置项。取值会先经过校验。"""
    state: State = ctx.obj
    store = JsonFileSettingsStore(state.settings_file)
    try:
        parsed = write_setting(store, key, value)
    except ConfigurationError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✅ {key} = {_display(parsed)}[/bold green]")
