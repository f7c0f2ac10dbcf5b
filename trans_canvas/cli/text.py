# trans_canvas/cli/text.py
"""提供不访问网络的文本工具命令：格式化、样式键查询和翻译判定。"""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from trans_canvas.core.types import DeviceClass, FontName, Language
from trans_canvas.formatter import format_content
from trans_canvas.gate import needs_polishing, needs_translation
from trans_canvas.typography import find_style_record

console = Console()

LanguageOption = Annotated[
    Language,
    typer.Option("--lang", "-l", help="目标语言。", case_sensitive=False),
]


def format_text(
    content: Annotated[str, typer.Argument(help="要格式化的文本。")],
    lang: LanguageOption = Language.EN,
    role: Annotated[
        str, typer.Option("--role", "-r", help="节点名称，用于判断是否需要标题大小写。")
    ] = "",
) -> None:
    """按目标语言的本地化规则格式化一段文本。"""
    console.print(format_content(content, lang, role), markup=False, highlight=False)


def style_lookup(
    family: Annotated[str, typer.Option("--family", help="字体族，不参与匹配。")] = "",
    style: Annotated[str, typer.Option("--style", help="字重名称，例如 Semibold。")] = "",
    size: Annotated[float, typer.Option("--size", help="字号。")] = 0,
    line_height: Annotated[float, typer.Option("--line-height", help="行高。")] = 0,
    lang: LanguageOption = Language.EN,
    device: Annotated[
        DeviceClass,
        typer.Option("--device", "-d", help="设备类型。", case_sensitive=False),
    ] = DeviceClass.PC,
) -> None:
    """在排版表中查询匹配的样式键和规范字体。"""
    record = find_style_record(
        FontName(family=family, style=style), size, line_height, lang, device
    )
    if record is None:
        console.print("[bold red]❌ 排版表中没有匹配的样式。[/bold red]")
        raise typer.Exit(code=1)

    table = Table(show_header=False, box=None)
    table.add_column(style="dim", justify="right")
    table.add_column(style="bright_white")
    table.add_row("名称", record.name)
    table.add_row("样式键", record.style_key)
    table.add_row("规范字体", f"{record.font.family} {record.font.style}")
    console.print(table)


def check_text(
    content: Annotated[str, typer.Argument(help="要检查的文本。")],
    lang: LanguageOption = Language.EN,
) -> None:
    """判断一段文本是否需要翻译或润色。"""
    translate_flag = needs_translation(content, lang)
    polish_flag = needs_polishing(content)
    console.print(f"需要翻译: {'[green]是[/green]' if translate_flag else '[dim]否[/dim]'}")
    console.print(f"值得润色: {'[green]是[/green]' if polish_flag else '[dim]否[/dim]'}")
