# trans_canvas/orchestrator.py
"""本模块包含 Trans-Canvas 处理引擎的主协调器。"""

import asyncio
import uuid
from collections.abc import Callable, Sequence
from typing import Any

import structlog

from trans_canvas.bridge import MessageBridge
from trans_canvas.collector import collect_process_units
from trans_canvas.config import TransCanvasConfig
from trans_canvas.core.exceptions import RunFailedError
from trans_canvas.core.interfaces import HostTree, SettingsStore
from trans_canvas.core.types import (
    AutoStylelintMode,
    DisplayMode,
    EngineError,
    EngineSuccess,
    ProcessUnit,
    RunReport,
    RunState,
)
from trans_canvas.dispatcher import Dispatcher
from trans_canvas.engine_registry import create_engine
from trans_canvas.engines.base import BaseTranslationEngine
from trans_canvas.formatter import format_content
from trans_canvas.settings import (
    SettingKey,
    SettingsSnapshot,
    read_setting,
    write_setting,
)
from trans_canvas.typography import resolve_font, resolve_style_key

logger = structlog.get_logger(__name__)

EngineFactory = Callable[..., BaseTranslationEngine[Any]]


class Orchestrator:
    """
    一次翻译或样式检查运行的状态机。

    状态流转: IDLE → COLLECTING_UNITS → DISPATCHING → APPLYING_RESULTS → IDLE，
    任何阶段出错都会进入 FAILED。同一个协调器上的运行依次执行。
    """

    def __init__(
        self,
        config: TransCanvasConfig,
        host: HostTree,
        settings_store: SettingsStore,
        *,
        engine_factory: EngineFactory = create_engine,
        bridge: MessageBridge | None = None,
    ):
        self.config = config
        self.host = host
        self.settings_store = settings_store
        self.engine_factory = engine_factory
        self.bridge = bridge
        self._state = RunState.IDLE
        self._run_lock = asyncio.Lock()

    @property
    def state(self) -> RunState:
        return self._state

    def _transition(self, new_state: RunState) -> None:
        logger.debug("状态迁移。", from_state=self._state.value, to_state=new_state.value)
        self._state = new_state

    # --- 命令 ---

    async def translate(self) -> RunReport | None:
        """翻译当前选区；自动样式检查开启时同时执行样式检查。"""
        auto_mode = read_setting(self.settings_store, SettingKey.AUTO_STYLELINT_MODE)
        return await self.run(
            self.host.get_selection(),
            needs_translation=True,
            needs_style_check=auto_mode is AutoStylelintMode.ON,
        )

    async def stylelint(self) -> RunReport | None:
        """只对当前选区执行样式检查。"""
        return await self.run(
            self.host.get_selection(), needs_translation=False, needs_style_check=True
        )

    def change_setting(self, key: SettingKey | str, value: Any) -> Any:
        return write_setting(self.settings_store, key, value)

    def read_setting(self, key: SettingKey | str) -> Any:
        return read_setting(self.settings_store, key)

    # --- 运行 ---

    async def run(
        self,
        roots: Sequence[Any],
        needs_translation: bool,
        needs_style_check: bool,
    ) -> RunReport | None:
        """
        对给定根节点执行一次完整的运行。

        Returns:
            运行报告；选区为空时不做任何事并返回 None。

        Raises:
            RunFailedError: 配置、调度或单条翻译出错。原始错误保存在 `__cause__` 中。
            asyncio.CancelledError: 运行被取消。

        """
        if not roots:
            logger.info("没有选中节点，跳过本次运行。")
            return None

        async with self._run_lock:
            run_id = uuid.uuid4().hex
            with structlog.contextvars.bound_contextvars(run_id=run_id):
                try:
                    return await asyncio.wait_for(
                        self._run(run_id, roots, needs_translation, needs_style_check),
                        timeout=self.config.dispatch.run_timeout,
                    )
                except asyncio.CancelledError:
                    self._transition(RunState.FAILED)
                    logger.warning("运行已被取消。")
                    raise
                except asyncio.TimeoutError as e:
                    self._transition(RunState.FAILED)
                    logger.error("运行超时。", timeout=self.config.dispatch.run_timeout)
                    raise RunFailedError(
                        f"运行在 {self.config.dispatch.run_timeout} 秒内未完成", run_id
                    ) from e
                except RunFailedError:
                    self._transition(RunState.FAILED)
                    raise
                except Exception as e:
                    self._transition(RunState.FAILED)
                    logger.error("运行失败。", error=str(e), exc_info=True)
                    raise RunFailedError(f"运行失败: {e}", run_id) from e

    async def _run(
        self,
        run_id: str,
        roots: Sequence[Any],
        needs_translation: bool,
        needs_style_check: bool,
    ) -> RunReport:
        self._transition(RunState.COLLECTING_UNITS)
        snapshot = SettingsSnapshot.from_store(self.settings_store)
        target = snapshot.target_language
        provider = snapshot.translation_provider if needs_translation else None
        logger.info(
            "开始处理。",
            target_language=target.value,
            display_mode=snapshot.display_mode.value,
            provider=provider.value if provider else None,
        )

        if snapshot.display_mode is DisplayMode.DUPLICATE:
            roots = [self._duplicate(root, snapshot) for root in roots]

        units = collect_process_units(
            self.host, roots, needs_translation, needs_style_check, target, provider
        )
        report = RunReport(
            run_id=run_id,
            state=RunState.IDLE,
            target_language=target,
            provider=provider,
            unit_count=len(units),
        )

        to_translate = [unit for unit in units if unit.needs_translation]
        if to_translate:
            assert provider is not None
            self._transition(RunState.DISPATCHING)
            await self._dispatch(run_id, to_translate, snapshot)

        self._transition(RunState.APPLYING_RESULTS)
        for unit in to_translate:
            self._apply_translation(unit, report)
        for unit in units:
            if unit.needs_style_check:
                self._check_style(unit, report)

        self._transition(RunState.IDLE)
        logger.info(
            "处理完成。",
            unit_count=report.unit_count,
            translated_count=report.translated_count,
            style_checked_count=report.style_checked_count,
        )
        return report

    def _duplicate(self, root: Any, snapshot: SettingsSnapshot) -> Any:
        clone = self.host.clone(root)
        self.host.set_name(
            clone, f"{self.host.get_name(clone)}/{snapshot.target_language.value}"
        )
        x, y, width = self.host.get_bounds(clone)
        self.host.set_position(clone, x + width + self.config.duplicate_offset, y)
        return clone

    async def _dispatch(
        self, run_id: str, units: list[ProcessUnit], snapshot: SettingsSnapshot
    ) -> None:
        """翻译所有单元；只要有一条失败，整批结果都不会写回。"""
        provider = snapshot.translation_provider
        engine = self.engine_factory(provider, self.config, bridge=self.bridge)
        dispatcher = Dispatcher(
            self.config.dispatch.translation_interval, label=provider.value
        )
        try:
            await engine.initialize()
            results = await engine.translate_via(
                dispatcher,
                [unit.source_text for unit in units],
                snapshot.target_language,
            )
        finally:
            await engine.close()

        failures = [res for res in results if isinstance(res, EngineError)]
        if failures:
            logger.error(
                "部分文本翻译失败，放弃写回本批结果。",
                failed=len(failures),
                total=len(results),
            )
            raise RunFailedError(
                f"{len(failures)}/{len(results)} 条文本翻译失败: "
                f"{failures[0].error_message}",
                run_id,
            )

        # 结果按输入顺序返回，再按节点 ID 关联回单元
        translated_by_id = {
            unit.node_id: res.translated_text
            for unit, res in zip(units, results, strict=True)
            if isinstance(res, EngineSuccess)
        }
        for unit in units:
            unit.translated_text = translated_by_id.get(unit.node_id)

    def _apply_translation(self, unit: ProcessUnit, report: RunReport) -> None:
        if unit.translated_text is None:
            return
        target = unit.target_language
        content = format_content(unit.translated_text, target, unit.role_hint)
        ref = unit.node_ref
        font = resolve_font(
            self.host.get_font(ref),
            self.host.get_font_size(ref),
            self.host.get_line_height(ref),
            target,
            self.config.device_class,
        )
        self.host.set_text(ref, content)
        if font is not None:
            self.host.set_font(ref, font)
        else:
            logger.warning("未找到匹配的规范字体，保留原字体。", node_id=unit.node_id)
            report.font_misses.append(unit.node_id)
        report.translated_count += 1

    def _check_style(self, unit: ProcessUnit, report: RunReport) -> None:
        ref = unit.node_ref
        style_key = resolve_style_key(
            self.host.get_font(ref),
            self.host.get_font_size(ref),
            self.host.get_line_height(ref),
            unit.target_language,
            self.config.device_class,
        )
        unit.style_key = style_key or None
        if not style_key:
            logger.warning("未找到匹配的样式键。", node_id=unit.node_id)
            report.style_misses.append(unit.node_id)
        report.style_checked_count += 1
