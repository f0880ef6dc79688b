import pytest
from fastapi.testclient import TestClient

from aimi.api.v1.llm import get_llm_service
from aimi.core.settings import AppSettings, get_settings
from aimi.infrastructure.llm.router.types import LLMRateLimitError
from aimi.main import create_app
from aimi.services.llm_service import LLMService

PAYLOAD = {"messages": [{"role": "user", "content": "Chào em"}], "provider": "silicon"}


@pytest.fixture
def make_client(clean_env, config_factory, router_factory):
    def _make(config=None, settings=None, **outcomes):
        app = create_app()
        router = router_factory(config or config_factory(keys=["silicon"]), **outcomes)
        app.dependency_overrides[get_llm_service] = lambda: LLMService(router)
        if settings is not None:
            app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)
    return _make


def test_generate_reply(make_client):
    client = make_client(silicon=["Chào anh"])
    response = client.post("/api/v1/llm/generate", json=PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["reply"] == "Chào anh"
    assert body["provider_used"] == "silicon"
    assert body["model_used"] == "silicon-model"
    assert body["attempt_count"] is None


def test_generate_fallback_mode_reports_attempts(make_client, config_factory):
    client = make_client(
        config=config_factory(keys=["silicon", "deepseek"]),
        silicon=[LLMRateLimitError("quota")],
        deepseek=["ok"],
    )
    response = client.post("/api/v1/llm/generate", json={**PAYLOAD, "mode": "fallback"})

    assert response.status_code == 200
    assert response.json()["attempt_count"] == 3
    assert response.json()["fallback_used"] is True


def test_all_providers_failed(make_client, config_factory):
    config = config_factory(keys=["silicon", "gemini"], enable_fallback=True, fallback_providers=("gemini",))
    client = make_client(
        config=config,
        silicon=[LLMRateLimitError("quota exceeded")],
        gemini=[LLMRateLimitError("quota exceeded")],
    )
    response = client.post("/api/v1/llm/generate", json=PAYLOAD)

    assert response.status_code == 503
    detail = response.json()["detail"]
    assert detail["code"] == "LLM_ALL_PROVIDERS_FAILED"
    assert detail["providers_tried"] == ["silicon/silicon-model", "gemini/gemini-model"]
    assert detail["attempts"][0]["error"] == "quota exceeded"


def test_empty_reply_is_an_error(make_client):
    response = make_client(silicon=["  "]).post("/api/v1/llm/generate", json=PAYLOAD)

    assert response.status_code == 502
    assert response.json()["detail"]["code"] == "LLM_EMPTY_REPLY"


@pytest.mark.parametrize(
    "payload",
    [
        {"messages": []},
        {"messages": [{"role": "tool", "content": "x"}]},
        {"messages": [{"role": "user", "content": "x"}], "mode": "turbo"},
    ],
)
def test_invalid_requests(make_client, payload):
    assert make_client().post("/api/v1/llm/generate", json=payload).status_code == 422


def test_status_hidden_in_production(make_client):
    client = make_client(settings=AppSettings(app_env="production", dev_admin_secret="s3cret"))

    assert client.get("/api/v1/llm/status").status_code == 404
    assert client.get("/api/v1/llm/status", headers={"X-Admin-Secret": "wrong"}).status_code == 404


def test_status_with_admin_secret(make_client, clean_env):
    clean_env.setenv("SILICON_API_KEY", "sk-live-secret")
    client = make_client(settings=AppSettings(app_env="production", dev_admin_secret="s3cret"), silicon=["unused"])
    response = client.get("/api/v1/llm/status", headers={"X-Admin-Secret": "s3cret"})

    assert response.status_code == 200
    body = response.json()
    assert body["providers"]["silicon"]["configured"] is True
    assert body["providers"]["gemini"]["configured"] is False
    assert "silicon" in body["adapters"]
    assert "sk-live-secret" not in response.text


def test_status_open_in_development(make_client):
    client = make_client(settings=AppSettings(app_env="development"))
    assert client.get("/api/v1/llm/status").status_code == 200


def test_health(make_client):
    assert make_client().get("/health").json() == {"status": "ok"}
