# backend/tests/conftest.py

import pytest

from aimi.core.settings import LLMRoutingConfig, ProviderSettings
from aimi.infrastructure.llm.router.adapters.base import BaseLLMAdapter
from aimi.infrastructure.llm.router.core import LLMRouter


ENV_NAMES = (
    "APP_ENV", "LOG_LEVEL", "DEV_ADMIN_SECRET", "APP_URL",
    "LLM_DEFAULT_PROVIDER", "LLM_ENABLE_FALLBACK", "LLM_FALLBACK_PROVIDERS",
    "LLM_REQUEST_TIMEOUT", "GOOGLE_MODEL_3",
    "SILICON_API_KEY", "GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY",
    "ZHIPU_API_KEY", "MOONSHOT_API_KEY", "DEEPSEEK_API_KEY", "OPENROUTER_API_KEY",
)


def make_config(keys=(), **kwargs) -> LLMRoutingConfig:
    """Routing config where every provider in `keys` has one dummy key."""
    providers = {name: ProviderSettings(api_keys=(f"{name}-key-123456",)) for name in keys}
    providers.update(kwargs.pop("providers", {}))
    return LLMRoutingConfig(providers=providers, **kwargs)


class FakeAdapter(BaseLLMAdapter):
    """Adapter returning scripted outcomes; exceptions in the script are raised."""

    def __init__(self, name, outcomes=("ok",), default_model=None):
        super().__init__()
        self.name = name
        self.default_model = default_model or f"{name}-model"
        self.outcomes = list(outcomes)
        self.calls = []
        self.description = f"Fake {name}"

    def generate_response(self, messages, model=None, *, config=None):
        self.calls.append((list(messages), model))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def fake_adapter():
    return FakeAdapter


@pytest.fixture
def router_factory():
    def _make(config, **outcomes):
        adapters = {name: FakeAdapter(name, script) for name, script in outcomes.items()}
        return LLMRouter(adapters=adapters, config_provider=lambda: config)
    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Empty LLM environment, no .env file in the working directory."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
