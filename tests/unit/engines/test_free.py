# tests/unit/engines/test_free.py
"""针对逐条翻译引擎 `FreeEngine` 的单元测试。"""

import httpx
import pytest

from trans_canvas.core.types import EngineError, EngineSuccess, Language
from trans_canvas.dispatcher import Dispatcher
from trans_canvas.engines.free import FreeEngine, FreeEngineConfig


def make_engine(handler) -> FreeEngine:  # type: ignore[no-untyped-def]
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FreeEngine(FreeEngineConfig(), client=client)


def gtx_response(*segments: str) -> httpx.Response:
    return httpx.Response(200, json=[[[segment, "src", None, None] for segment in segments]])


@pytest.mark.asyncio
async def test_one_get_per_text_and_segments_are_joined() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        text = request.url.params["q"]
        return gtx_response(f"{text}-1. ", f"{text}-2.")

    engine = make_engine(handler)
    results = await engine.translate_via(Dispatcher(0, "free"), ["a", "b"], Language.ZH)

    assert results == [
        EngineSuccess(translated_text="a-1. a-2."),
        EngineSuccess(translated_text="b-1. b-2."),
    ]
    assert len(seen) == 2
    params = seen[0].url.params
    assert params["client"] == "gtx"
    assert params["dt"] == "t"
    assert params["sl"] == "en"
    assert params["tl"] == "zh"
    await engine.close()


@pytest.mark.asyncio
async def test_item_failures_are_captured_per_item() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["q"] == "bad":
            return httpx.Response(429)
        return gtx_response("ok")

    engine = make_engine(handler)
    results = await engine.translate_via(
        Dispatcher(0, "free"), ["good", "bad", "also good"], Language.EN
    )

    assert isinstance(results[0], EngineSuccess)
    assert isinstance(results[1], EngineError)
    assert "429" in results[1].error_message
    assert isinstance(results[2], EngineSuccess)


@pytest.mark.asyncio
async def test_unparseable_body_is_item_error() -> None:
    engine = make_engine(lambda request: httpx.Response(200, json={"oops": 1}))
    results = await engine.translate_via(Dispatcher(0, "free"), ["x"], Language.EN)
    assert isinstance(results[0], EngineError)


@pytest.mark.asyncio
async def test_empty_input_makes_no_calls() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("不应发出请求")

    assert await make_engine(handler).translate_via(Dispatcher(0, "free"), [], Language.EN) == []
