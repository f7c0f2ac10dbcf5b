"""Trans-Canvas 命令行界面。"""

from .main import app

__all__ = ["app"]
