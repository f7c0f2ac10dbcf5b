# trans_canvas/cli/main.py
"""Trans-Canvas CLI 的主入口点。"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

import trans_canvas
from trans_canvas.cli.run import polish, stylelint, translate
from trans_canvas.cli.settings import settings_app
from trans_canvas.cli.state import State
from trans_canvas.cli.text import check_text, format_text, style_lookup
from trans_canvas.config import TransCanvasConfig
from trans_canvas.logging_config import setup_logging

app = typer.Typer(
    name="trans-canvas",
    help="🎨 Trans-Canvas: 设计稿文本的批量本地化助手。",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(settings_app, name="settings")
app.command("format")(format_text)
app.command("style")(style_lookup)
app.command("check")(check_text)
app.command("translate")(translate)
app.command("stylelint")(stylelint)
app.command("polish")(polish)

console = Console()


def version_callback(value: bool) -> None:
    """处理 --version 选项的回调函数。"""
    if value:
        console.print(f"Trans-Canvas [bold cyan]v{trans_canvas.__version__}[/bold cyan]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="显示版本信息并退出。",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    settings_file: Annotated[
        Path,
        typer.Option(
            "--settings-file",
            envvar="TC_SETTINGS_FILE",
            help="保存用户设置的 JSON 文件。",
        ),
    ] = Path("trans_canvas_settings.json"),
) -> None:
    """主回调函数，在任何子命令执行前加载配置并初始化日志。"""
    try:
        config = TransCanvasConfig()
        setup_logging(log_level=config.logging.level, log_format=config.logging.format)
        ctx.obj = State(config=config, settings_file=settings_file)
    except Exception as e:
        console.print("[bold red]❌ 启动失败：无法加载配置或初始化日志。[/bold red]")
        console.print(f"[dim]{e}[/dim]")
        raise typer.Exit(code=1) from e
