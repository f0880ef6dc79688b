#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Key availability - which providers have a usable credential right now.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from ....core.settings import LLMRoutingConfig
from .types import ProviderType

# Environment variables accepted as the credential for each provider
CREDENTIAL_NAMES: Dict[str, Tuple[str, ...]] = {
    ProviderType.SILICON.value: ("SILICON_API_KEY",),
    ProviderType.GEMINI.value: ("GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"),
    ProviderType.ZHIPU.value: ("ZHIPU_API_KEY",),
    ProviderType.MOONSHOT.value: ("MOONSHOT_API_KEY",),
    ProviderType.DEEPSEEK.value: ("DEEPSEEK_API_KEY",),
    ProviderType.OPENROUTER.value: ("OPENROUTER_API_KEY",),
}


def has_key(provider: str, config: LLMRoutingConfig) -> bool:
    """
    Check whether a provider has at least one credential configured.

    Unknown providers are reported as available so the call is attempted
    and fails downstream with a clear error instead of being dropped.

    Args:
        provider: Provider name
        config: Routing config snapshot

    Returns:
        True if the provider can be called
    """
    if provider not in CREDENTIAL_NAMES:
        return True
    return bool(config.provider(provider).api_keys)


def provider_status(config: LLMRoutingConfig) -> Dict[str, Any]:
    """Per-provider credential presence plus routing flags, without key values."""
    providers = {
        name: {
            "configured": has_key(name, config),
            "key_name": " or ".join(names),
        }
        for name, names in CREDENTIAL_NAMES.items()
    }
    configured = sum(1 for p in providers.values() if p["configured"])
    total = len(providers)
    return {
        "summary": {
            "total": total,
            "configured": configured,
            "missing": total - configured,
            "status": "operational" if configured > 0 else "no_providers",
        },
        "providers": providers,
        "config": {
            "default_provider": config.default_provider or "not set",
            "fallback_enabled": config.enable_fallback,
            "fallback_providers": ",".join(config.fallback_providers) or "not set",
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
