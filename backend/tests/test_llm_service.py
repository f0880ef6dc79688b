import pytest

from aimi.infrastructure.llm.router.types import (
    EmptyReplyError, FallbackResult, LLMRateLimitError, SmartFallbackResult,
)
from aimi.services.llm_service import GenerationMode, LLMService

MESSAGES = [{"role": "user", "content": "Em ăn cơm chưa?"}]


def test_chat_reply_router_mode(config_factory, router_factory):
    service = LLMService(router_factory(config_factory(keys=["silicon"]), silicon=["Em ăn rồi"]))
    result = service.chat_reply(MESSAGES)

    assert result.reply == "Em ăn rồi"
    assert result.provider_used == "silicon"


@pytest.mark.parametrize("reply", ["", "   \n\t"])
def test_empty_reply_is_rejected(config_factory, router_factory, reply):
    service = LLMService(router_factory(config_factory(keys=["silicon"]), silicon=[reply]))

    with pytest.raises(EmptyReplyError) as exc_info:
        service.chat_reply(MESSAGES)

    assert exc_info.value.code == "LLM_EMPTY_REPLY"
    assert exc_info.value.provider == "silicon"
    assert exc_info.value.model == "silicon-model"


def test_generate_allows_empty_reply(config_factory, router_factory):
    service = LLMService(router_factory(config_factory(keys=["silicon"]), silicon=[""]))
    assert service.generate(MESSAGES).reply == ""


def test_fallback_mode(config_factory, router_factory):
    service = LLMService(router_factory(
        config_factory(keys=["silicon", "deepseek"]),
        silicon=[LLMRateLimitError("quota")],
        deepseek=["Rồi anh ơi"],
    ))
    result = service.chat_reply(MESSAGES, mode=GenerationMode.FALLBACK)

    assert isinstance(result, FallbackResult)
    assert result.fallback_used is True
    assert result.provider_used == "deepseek"


def test_smart_mode_accepts_plain_string(config_factory, router_factory):
    service = LLMService(router_factory(config_factory(keys=["gemini"]), gemini=["Chưa, anh nấu cho em nhé"]))
    result = service.chat_reply(MESSAGES, mode="smart", language="en")

    assert isinstance(result, SmartFallbackResult)
    assert result.category == "short"


def test_errors_are_propagated(config_factory, router_factory):
    error = LLMRateLimitError("quota")
    service = LLMService(router_factory(config_factory(keys=["silicon"]), silicon=[error]))

    with pytest.raises(LLMRateLimitError) as exc_info:
        service.chat_reply(MESSAGES)
    assert exc_info.value is error


def test_failure_log_hides_error_text_in_production(config_factory, router_factory, caplog):
    error = LLMRateLimitError('Rate limit exceeded: {"error":"account sk-live-7781 over quota"}', "silicon")
    service = LLMService(router_factory(config_factory(keys=["silicon"]), silicon=[error]))

    with pytest.raises(LLMRateLimitError):
        service.chat_reply(MESSAGES)

    assert "LLM call failed: provider=default" in caplog.text
    assert "(LLMRateLimitError)" in caplog.text
    assert "sk-live-7781" not in caplog.text
