# trans_canvas/cli/state.py
"""定义 CLI 应用的共享状态对象。"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trans_canvas.config import TransCanvasConfig


class State:
    """一个简单的类，用于通过 Typer 上下文传递共享状态。"""

    def __init__(self, config: TransCanvasConfig, settings_file: Path) -> None:
        """初始化状态对象。

        Args:
            config: Trans-Canvas 的主配置对象。
            settings_file: 保存用户设置的 JSON 文件路径。
        """
        self.config = config
        self.settings_file = settings_file
