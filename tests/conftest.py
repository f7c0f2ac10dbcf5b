# tests/conftest.py
"""项目全局共享的测试 Fixtures。"""

import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from pytest_mock import MockerFixture
from rich.console import Console

from trans_canvas.config import TransCanvasConfig


@pytest.fixture(scope="session", autouse=True)
def disable_rich_colors_for_tests(
    session_mocker: MockerFixture,
) -> Generator[None, None, None]:
    """全局禁用 rich 库的颜色输出，以确保测试结果的确定性。"""
    original_init = Console.__init__

    def new_init(self: Console, *args: Any, **kwargs: Any) -> None:
        kwargs["force_terminal"] = False
        kwargs["color_system"] = None
        original_init(self, *args, **kwargs)

    session_mocker.patch("rich.console.Console.__init__", new=new_init)
    yield


@pytest.fixture(autouse=True)
def isolate_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """在临时目录中运行每个测试，避免读取开发者本地的 .env 和 TC_* 变量。"""
    for name in list(os.environ):
        if name.startswith("TC_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
    # CLI 测试会重新配置日志，避免处理器指向已关闭的输出流
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def test_config() -> TransCanvasConfig:
    """一个不限速、带测试凭据的配置。"""
    return TransCanvasConfig(
        dispatch={"translation_interval": 0, "polish_interval": 0},
        bulk={"api_key": "test-bulk-key"},
        signed={"app_id": "test-app", "secret": "test-secret"},
        polish={"api_token": "test-token", "bot_id": "test-bot", "poll_interval": 0.01},
    )
