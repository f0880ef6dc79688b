#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Candidate builder - ordered list of providers to try for one request.
"""

import logging
from typing import Iterable, List, Optional

from ....core.settings import LLMRoutingConfig
from .keys import has_key
from .types import DEFAULT_PROVIDER, ProviderType, parse_provider

logger = logging.getLogger(__name__)

# Known-reliable providers used when nothing else is configured
DEFAULT_PRIORITY = (
    ProviderType.SILICON.value,
    ProviderType.GEMINI.value,
    ProviderType.DEEPSEEK.value,
)

# Returned even without a key so the failure is loud and attributable
LAST_RESORT_PROVIDER = ProviderType.GEMINI.value


def _recognized(name: Optional[str], known: Iterable[str]) -> Optional[str]:
    parsed = parse_provider(name)
    if parsed is None or parsed == DEFAULT_PROVIDER:
        return None
    return parsed if parsed in known else None


def select_default_provider(config: LLMRoutingConfig, known: Iterable[str]) -> str:
    """
    Pick the provider used when the caller expressed no valid preference.

    Order: configured default (recognized and keyed), then the first keyed
    provider of DEFAULT_PRIORITY, then LAST_RESORT_PROVIDER.
    """
    known = list(known)
    configured = _recognized(config.default_provider, known)
    if configured and has_key(configured, config):
        return configured
    if config.default_provider:
        logger.warning(
            f"[LLM Router] Default provider '{config.default_provider}' is unknown or has no key"
        )
    for name in DEFAULT_PRIORITY:
        if name in known and has_key(name, config):
            return name
    last_resort = LAST_RESORT_PROVIDER if LAST_RESORT_PROVIDER in known else known[0]
    logger.warning(f"[LLM Router] No provider has a key, using last resort '{last_resort}'")
    return last_resort


def build_candidates(preferred: Optional[str], config: LLMRoutingConfig,
                     known: Optional[Iterable[str]] = None) -> List[str]:
    """
    Build the ordered, de-duplicated provider list for one request.

    Args:
        preferred: Requested provider, alias or "default"
        config: Routing config snapshot
        known: Provider names the caller can dispatch to (defaults to all)

    Returns:
        Provider names, preferred (if valid) first
    """
    known = list(known) if known is not None else [p.value for p in ProviderType]
    if not known:
        return []
    candidates: List[str] = []

    # 1. Explicit preference is honored without a key check
    parsed = parse_provider(preferred)
    if parsed not in (None, DEFAULT_PROVIDER) and parsed in known:
        candidates.append(parsed)
    elif parsed != DEFAULT_PROVIDER:
        logger.warning(f"[LLM Router] Invalid provider '{preferred}', falling back to default")

    # 2. Default provider
    if not candidates:
        candidates.append(select_default_provider(config, known))

    # 3. Configured fallbacks
    if config.enable_fallback:
        fallbacks = []
        for raw in config.fallback_providers:
            name = _recognized(raw, known)
            if name and name != candidates[0] and has_key(name, config):
                fallbacks.append(name)
        candidates.extend(fallbacks)
        logger.debug(f"[LLM Router] Fallback providers: {', '.join(fallbacks) or 'none'}")

    # 4. Unique, first seen wins
    return list(dict.fromkeys(candidates))
