# trans_canvas/cli/utils.py
"""提供 CLI 命令使用的共享工具函数。"""

from rich.console import Console
from rich.table import Table

from trans_canvas.bridge import HttpBridgeTransport, MessageBridge
from trans_canvas.core.types import RunReport
from trans_canvas.document import DocumentTree
from trans_canvas.orchestrator import Orchestrator
from trans_canvas.settings import JsonFileSettingsStore

from .state import State

console = Console()


def create_orchestrator(
    state: State, tree: DocumentTree, transport: HttpBridgeTransport
) -> Orchestrator:
    """
    根据 CLI 状态创建一个协调器。

    Args:
        state: CLI 共享状态，提供配置和设置文件路径。
        tree: 要处理的文档。
        transport: 签名请求引擎使用的消息桥传输端，由调用方负责关闭。

    """
    bridge = MessageBridge(transport, timeout=state.config.dispatch.bridge_timeout)
    return Orchestrator(
        state.config,
        tree,
        JsonFileSettingsStore(state.settings_file),
        bridge=bridge,
    )


def print_report(report: RunReport) -> None:
    """以表格形式输出一次运行的汇总结果。"""
    table = Table(title="运行结果", show_header=False)
    table.add_column(style="dim", justify="right")
    table.add_column(style="bright_white")
    table.add_row("run_id", report.run_id)
    table.add_row("目标语言", report.target_language.value)
    table.add_row("翻译服务", report.provider.value if report.provider else "-")
    table.add_row("处理单元", str(report.unit_count))
    table.add_row("已翻译", str(report.translated_count))
    table.add_row("已检查样式", str(report.style_checked_count))
    if report.font_misses:
        table.add_row("[yellow]字体未匹配[/yellow]", ", ".join(report.font_misses))
    if report.style_misses:
        table.add_row("[yellow]样式未匹配[/yellow]", ", ".join(report.style_misses))
    console.print(table)
