# trans_canvas/cli/run.py
"""处理文档翻译、样式检查和文本润色的 CLI 命令。"""

import asyncio
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console

from trans_canvas.bridge import HttpBridgeTransport
from trans_canvas.core.exceptions import TransCanvasError
from trans_canvas.core.types import Language, RunReport
from trans_canvas.document import DocumentTree
from trans_canvas.gate import needs_polishing
from trans_canvas.polisher import Polisher

from .state import State
from .utils import create_orchestrator, print_report

logger = structlog.get_logger(__name__)
console = Console()

DocumentArgument = Annotated[
    Path,
    typer.Argument(help="要处理的 JSON 文档。", exists=True, dir_okay=False),
]
SelectOption = Annotated[
    list[str] | None,
    typer.Option("--select", "-s", help="要处理的节点 ID，默认使用文档中的选区。"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="结果写入的文件，默认覆盖原文档。"),
]


async def _async_run(
    state: State, tree: DocumentTree, needs_translation: bool
) -> RunReport | None:
    transport = HttpBridgeTransport()
    try:
        orchestrator = create_orchestrator(state, tree, transport)
        if needs_translation:
            return await orchestrator.translate()
        return await orchestrator.stylelint()
    finally:
        await transport.close()


def _run_document(
    ctx: typer.Context,
    document: Path,
    select: list[str] | None,
    output: Path | None,
    needs_translation: bool,
) -> None:
    state: State = ctx.obj
    try:
        tree = DocumentTree.load(document)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]❌ 无法读取文档: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    if select:
        tree.select(select)

    try:
        report = asyncio.run(_async_run(state, tree, needs_translation))
    except TransCanvasError as e:
        console.print(f"[bold red]❌ 处理失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    if report is None:
        console.print("[yellow]⚠️ 没有选中节点，未做任何处理。[/yellow]")
        return

    tree.dump(output or document)
    print_report(report)
    console.print(f"[bold green]✅ 结果已写入 {output or document}[/bold green]")


def translate(
    ctx: typer.Context,
    document: DocumentArgument,
    select: SelectOption = None,
    output: OutputOption = None,
) -> None:
    """翻译文档中选中的文本节点。"""
    _run_document(ctx, document, select, output, needs_translation=True)


def stylelint(
    ctx: typer.Context,
    document: DocumentArgument,
    select: SelectOption = None,
    output: OutputOption = None,
) -> None:
    """检查文档中选中文本节点的排版样式。"""
    _run_document(ctx, document, select, output, needs_translation=False)


async def _async_polish(state: State, content: str, lang: Language) -> str:
    polisher = Polisher(
        state.config.polish, min_interval=state.config.dispatch.polish_interval
    )
    try:
        return await polisher.polish(content, lang)
    finally:
        await polisher.close()


def polish(
    ctx: typer.Context,
    content: Annotated[str, typer.Argument(help="要润色的文本。")],
    lang: Annotated[
        Language,
        typer.Option("--lang", "-l", help="文本语言。", case_sensitive=False),
    ] = Language.EN,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="即使文本过短也执行润色。")
    ] = False,
) -> None:
    """使用对话服务润色一段文本。"""
    state: State = ctx.obj
    if not force and not needs_polishing(content):
        console.print("[yellow]⚠️ 文本过短，无需润色。使用 --force 强制执行。[/yellow]")
        return

    try:
        result = asyncio.run(_async_polish(state, content, lang))
    except (TransCanvasError, ValueError) as e:
        console.print(f"[bold red]❌ 润色失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    console.print(result, markup=False, highlight=False)
