from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_ENVS = ("dev", "development")

DEFAULT_GEMINI_FLASH_MODEL = "gemini-2.5-flash"


class ProviderSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_keys: Tuple[str, ...] = ()
    base_url: Optional[str] = None
    default_model: Optional[str] = None
    timeout: float = 60.0


class LLMRoutingConfig(BaseModel):
    """Immutable snapshot of everything the router reads from the environment."""

    model_config = ConfigDict(frozen=True)

    providers: Dict[str, ProviderSettings] = Field(default_factory=dict)
    default_provider: Optional[str] = None
    enable_fallback: bool = False
    fallback_providers: Tuple[str, ...] = ()
    gemini_flash_model: str = DEFAULT_GEMINI_FLASH_MODEL
    env: str = "production"
    app_url: str = "http://localhost:3000"

    @property
    def verbose(self) -> bool:
        return self.env.lower() in DEV_ENVS

    def provider(self, name: str) -> ProviderSettings:
        return self.providers.get(name) or ProviderSettings()


class AppSettings(BaseSettings):
    # 基础
    app_name: str = "Aimi LLM Router"
    app_env: str = "production"
    log_level: Optional[str] = None
    dev_admin_secret: Optional[str] = None
    app_url: str = "http://localhost:3000"

    # 路由
    llm_default_provider: Optional[str] = None
    llm_enable_fallback: str = ""
    llm_fallback_providers: str = ""
    llm_request_timeout: float = 60.0
    google_model_3: Optional[str] = None

    # Provider 凭证与覆盖
    silicon_api_key: str = ""
    silicon_base_url: Optional[str] = None
    silicon_default_model: Optional[str] = None

    gemini_api_key: str = ""
    google_generative_ai_api_key: str = ""
    gemini_base_url: Optional[str] = None
    gemini_default_model: Optional[str] = None

    zhipu_api_key: str = ""
    zhipu_base_url: Optional[str] = None
    zhipu_default_model: Optional[str] = None

    moonshot_api_key: str = ""
    moonshot_base_url: Optional[str] = None
    moonshot_default_model: Optional[str] = None

    deepseek_api_key: str = ""
    deepseek_base_url: Optional[str] = None
    deepseek_default_model: Optional[str] = None

    openrouter_api_key: str = ""
    openrouter_base_url: Optional[str] = None
    openrouter_default_model: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in DEV_ENVS


def parse_key_list(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma separated key string, dropping quotes and blanks."""
    if not raw:
        return ()
    keys = (k.strip().strip("'\"").strip() for k in raw.split(","))
    return tuple(k for k in keys if k)


def parse_provider_list(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(p.strip().lower() for p in raw.split(",") if p.strip())


def _provider_settings(s: AppSettings, name: str, keys: Tuple[str, ...]) -> ProviderSettings:
    return ProviderSettings(
        api_keys=keys,
        base_url=getattr(s, f"{name}_base_url") or None,
        default_model=getattr(s, f"{name}_default_model") or None,
        timeout=s.llm_request_timeout,
    )


def routing_config_from_settings(s: AppSettings) -> LLMRoutingConfig:
    # gemini 兼容两个历史变量名
    gemini_keys = parse_key_list(s.gemini_api_key) or parse_key_list(s.google_generative_ai_api_key)
    providers = {
        "silicon": _provider_settings(s, "silicon", parse_key_list(s.silicon_api_key)),
        "gemini": _provider_settings(s, "gemini", gemini_keys),
        "zhipu": _provider_settings(s, "zhipu", parse_key_list(s.zhipu_api_key)),
        "moonshot": _provider_settings(s, "moonshot", parse_key_list(s.moonshot_api_key)),
        "deepseek": _provider_settings(s, "deepseek", parse_key_list(s.deepseek_api_key)),
        "openrouter": _provider_settings(s, "openrouter", parse_key_list(s.openrouter_api_key)),
    }
    default_provider = (s.llm_default_provider or "").strip().lower() or None
    return LLMRoutingConfig(
        providers=providers,
        default_provider=default_provider,
        enable_fallback=s.llm_enable_fallback.strip() == "true",
        fallback_providers=parse_provider_list(s.llm_fallback_providers),
        gemini_flash_model=s.google_model_3 or DEFAULT_GEMINI_FLASH_MODEL,
        env=s.app_env,
        app_url=s.app_url,
    )


def load_routing_config() -> LLMRoutingConfig:
    """Read the environment now and build a routing config (never cached)."""
    return routing_config_from_settings(AppSettings())


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """进程级配置（日志、管理密钥等）。路由配置请使用 load_routing_config。"""
    return AppSettings()


def settings_diagnostics(config: Optional[LLMRoutingConfig] = None) -> Dict[str, Any]:
    """生成运行配置简要诊断信息（不包含密钥）。"""
    config = config or load_routing_config()
    providers: Dict[str, Dict[str, Any]] = {
        name: {
            "api_keys_count": len(p.api_keys),
            "base_url": p.base_url,
            "default_model": p.default_model,
        }
        for name, p in config.providers.items()
    }
    fallback: List[str] = list(config.fallback_providers)
    return {
        "env": config.env,
        "default_provider": config.default_provider,
        "fallback_enabled": config.enable_fallback,
        "fallback_providers": fallback,
        "gemini_flash_model": config.gemini_flash_model,
        "providers": providers,
    }
