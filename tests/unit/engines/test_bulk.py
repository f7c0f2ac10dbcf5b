# tests/unit/engines/test_bulk.py
"""针对批量翻译引擎 `BulkEngine` 的单元测试。"""

import json

import httpx
import pytest

from trans_canvas.core.exceptions import (
    ConfigurationError,
    DispatchError,
    TransportError,
)
from trans_canvas.core.types import EngineSuccess, Language
from trans_canvas.dispatcher import Dispatcher
from trans_canvas.engines.bulk import BulkEngine, BulkEngineConfig


def make_engine(handler) -> BulkEngine:  # type: ignore[no-untyped-def]
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BulkEngine(BulkEngineConfig(api_key="secret-key"), client=client)


def test_missing_api_key_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="TC_BULK_API_KEY"):
        BulkEngine(BulkEngineConfig())


@pytest.mark.asyncio
async def test_whole_batch_is_sent_in_one_post() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "data": {
                    "translations": [
                        {"translatedText": f"EN:{text}"} for text in body["q"]
                    ]
                }
            },
        )

    engine = make_engine(handler)
    results = await engine.translate_via(
        Dispatcher(0, "bulk"), ["你好", "世界"], Language.EN
    )

    assert results == [
        EngineSuccess(translated_text="EN:你好"),
        EngineSuccess(translated_text="EN:世界"),
    ]
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["key"] == "secret-key"
    assert json.loads(request.content) == {
        "q": ["你好", "世界"],
        "target": "en",
        "source": "zh",
    }
    await engine.close()


@pytest.mark.asyncio
async def test_missing_translated_text_becomes_empty_string() -> None:
    engine = make_engine(
        lambda request: httpx.Response(
            200, json={"data": {"translations": [{"translatedText": "a"}, {}]}}
        )
    )
    results = await engine.translate_via(Dispatcher(0, "bulk"), ["x", "y"], Language.EN)
    assert [r.translated_text for r in results] == ["a", ""]  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_short_translation_list_is_padded_with_empty_strings() -> None:
    engine = make_engine(
        lambda request: httpx.Response(
            200, json={"data": {"translations": [{"translatedText": "a"}]}}
        )
    )
    results = await engine.translate_via(
        Dispatcher(0, "bulk"), ["x", "y", "z"], Language.EN
    )
    assert all(isinstance(r, EngineSuccess) for r in results)
    assert [r.translated_text for r in results] == ["a", "", ""]  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_non_2xx_is_wrapped_as_dispatch_error() -> None:
    engine = make_engine(lambda request: httpx.Response(403, json={"error": "denied"}))

    with pytest.raises(DispatchError, match="bulk - ") as exc_info:
        await engine.translate_via(Dispatcher(0, "bulk"), ["x"], Language.EN)

    assert isinstance(exc_info.value.__cause__, TransportError)
    assert "403" in str(exc_info.value)


@pytest.mark.asyncio
async def test_malformed_body_is_transport_error() -> None:
    engine = make_engine(lambda request: httpx.Response(200, json={"unexpected": True}))
    with pytest.raises(TransportError, match="data.translations"):
        await engine.atranslate_batch(["x"], Language.EN, Language.ZH)


@pytest.mark.asyncio
async def test_result_count_mismatch_is_transport_error() -> None:
    engine = make_engine(
        lambda request: httpx.Response(200, json={"data": {"translations": []}})
    )
    with pytest.raises(TransportError, match="期望 1 条"):
        await engine.translate_via(Dispatcher(0, "bulk"), ["x"], Language.EN)


@pytest.mark.asyncio
async def test_check_accessible() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.params["q"] == "test"
        assert request.url.params["target"] == "zh"
        return httpx.Response(200, json={})

    assert await make_engine(handler).check_accessible() is True
    assert (
        await make_engine(lambda request: httpx.Response(500)).check_accessible()
        is False
    )


@pytest.mark.asyncio
async def test_check_accessible_handles_network_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert await make_engine(handler).check_accessible() is False
