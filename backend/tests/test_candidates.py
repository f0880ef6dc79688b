import pytest

from aimi.infrastructure.llm.router.candidates import build_candidates, select_default_provider


@pytest.mark.parametrize("preferred, expected", [("deepseek", "deepseek"), ("google", "gemini"),
                                                  ("SiliconFlow", "silicon"), ("  Zhipu ", "zhipu")])
def test_preferred_provider_comes_first_without_key_check(config_factory, preferred, expected):
    assert build_candidates(preferred, config_factory()) == [expected]


def test_invalid_provider_falls_back_to_default(config_factory, caplog):
    config = config_factory(keys=["silicon"])
    assert build_candidates("gpt-99", config) == ["silicon"]
    assert "Invalid provider 'gpt-99'" in caplog.text


def test_default_sentinel_uses_configured_default(config_factory):
    config = config_factory(keys=["silicon", "deepseek"], default_provider="deepseek")
    assert build_candidates("default", config) == ["deepseek"]


def test_configured_default_without_key_is_skipped(config_factory):
    config = config_factory(keys=["gemini"], default_provider="deepseek")
    assert build_candidates("default", config) == ["gemini"]


def test_priority_order_when_no_default(config_factory):
    assert build_candidates("default", config_factory(keys=["gemini", "deepseek"])) == ["gemini"]
    assert build_candidates("default", config_factory(keys=["deepseek", "silicon"])) == ["silicon"]
    assert build_candidates("default", config_factory(keys=["deepseek"])) == ["deepseek"]


def test_last_resort_when_nothing_is_keyed(config_factory):
    assert build_candidates("default", config_factory()) == ["gemini"]
    assert build_candidates(None, config_factory()) == ["gemini"]


def test_last_resort_respects_known_providers(config_factory):
    assert select_default_provider(config_factory(), ["zhipu", "moonshot"]) == "zhipu"


def test_empty_known_list_gives_no_candidates(config_factory):
    assert build_candidates("silicon", config_factory(keys=["silicon"]), known=[]) == []


def test_fallbacks_are_filtered_and_deduplicated(config_factory):
    config = config_factory(
        keys=["silicon", "gemini", "moonshot"],
        enable_fallback=True,
        fallback_providers=("gemini", "silicon", "llama", "deepseek", "google", "moonshot"),
    )
    assert build_candidates("silicon", config) == ["silicon", "gemini", "moonshot"]


def test_fallbacks_ignored_when_disabled(config_factory):
    config = config_factory(keys=["silicon", "gemini"], fallback_providers=("gemini",))
    assert build_candidates("silicon", config) == ["silicon"]


def test_candidates_only_include_known_providers(config_factory):
    config = config_factory(keys=["silicon", "gemini"], enable_fallback=True, fallback_providers=("gemini",))
    assert build_candidates("silicon", config, known=["silicon"]) == ["silicon"]
