#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fallback chains - fixed (provider, model) alternatives per provider group.

Never leave a user behind: when the primary model fails, try a lighter or
faster alternative, at most MAX_ATTEMPTS calls per request. Chains list every
provider of the group; the attempt loop applies the ceiling.

Chains are rebuilt on every call so environment changes (keys, the stable
Gemini alias) are picked up without a restart.
"""

import logging
from typing import Dict, List, Optional

from ....core.settings import LLMRoutingConfig
from .core import LLMRouter, MessagesInput
from .keys import has_key
from .model_selector import (
    get_narrative_instruction,
    get_recommended_max_tokens,
    get_recommended_temperature,
    select_model_for_message,
)
from .types import (
    DEFAULT_PROVIDER, AllProvidersFailedError, AttemptRecord, FallbackCandidate,
    FallbackResult, LLMConfigurationError, LLMMessage, MAX_ATTEMPTS, SmartFallbackResult,
    coerce_messages, parse_provider,
)

logger = logging.getLogger(__name__)


def get_fallback_chains(config: LLMRoutingConfig) -> Dict[str, List[FallbackCandidate]]:
    """
    Build every provider group's fallback chain, keeping only keyed providers.

    Args:
        config: Routing config snapshot

    Returns:
        Mapping of provider group (aliases included) to ordered candidates
    """
    gemini = FallbackCandidate("gemini", config.gemini_flash_model, "Gemini Flash")
    qwen = FallbackCandidate("silicon", "Qwen/Qwen2.5-14B-Instruct", "Qwen 2.5 14B")
    silicon_deepseek = FallbackCandidate("silicon", "deepseek-ai/DeepSeek-V3", "DeepSeek V3 (Silicon)")
    deepseek = FallbackCandidate("deepseek", "deepseek-chat", "DeepSeek Chat")
    moonshot = FallbackCandidate("moonshot", "moonshot-v1-32k", "Moonshot V1 32K")
    openrouter = FallbackCandidate("openrouter", "meta-llama/llama-3.3-70b-instruct", "Llama 3.3 70B (OpenRouter)")
    zhipu = FallbackCandidate("zhipu", "glm-4-plus", "GLM-4 Plus")

    raw_chains = {
        "gemini": [gemini, qwen, silicon_deepseek, deepseek, moonshot, openrouter],
        "google": [gemini, qwen, silicon_deepseek, deepseek, moonshot, openrouter],
        "silicon": [silicon_deepseek, qwen, gemini, deepseek, moonshot, openrouter],
        "siliconflow": [silicon_deepseek, qwen, gemini, deepseek, moonshot, openrouter],
        "deepseek": [deepseek, silicon_deepseek, qwen, gemini, moonshot, openrouter],
        # only reached when zhipu is requested explicitly
        "zhipu": [zhipu, qwen, silicon_deepseek, deepseek, gemini],
        "moonshot": [moonshot, gemini, qwen, silicon_deepseek, deepseek, openrouter],
        "openrouter": [openrouter, gemini, qwen, silicon_deepseek, deepseek, moonshot],
        DEFAULT_PROVIDER: [qwen, silicon_deepseek, deepseek, gemini, moonshot, openrouter],
    }

    availability = {name: has_key(name, config) for name in
                    ("gemini", "silicon", "deepseek", "moonshot", "openrouter", "zhipu")}
    logger.debug(f"[Fallback] Provider availability: {availability}")

    chains: Dict[str, List[FallbackCandidate]] = {}
    for key, chain in raw_chains.items():
        chains[key] = [c for c in chain if has_key(c.provider, config)]
        if not chains[key]:
            logger.error(f"[Fallback] No providers available for chain '{key}', check API keys")
    return chains


def build_attempt_chain(primary_provider: str, primary_model: Optional[str],
                        config: LLMRoutingConfig) -> List[FallbackCandidate]:
    """Explicit primary (when a model is given) followed by its fallback chain."""
    chain: List[FallbackCandidate] = []
    primary = parse_provider(primary_provider)
    if primary_model and primary not in (None, DEFAULT_PROVIDER):
        chain.append(FallbackCandidate(primary, primary_model, f"{primary}/{primary_model}"))

    chains = get_fallback_chains(config)
    key = str(primary_provider or DEFAULT_PROVIDER).strip().lower()
    for candidate in chains[key] if key in chains else chains[DEFAULT_PROVIDER]:
        if candidate.provider == primary and candidate.model == primary_model:
            continue
        if candidate not in chain:
            chain.append(candidate)
    return chain


def _exhausted(attempts: List[AttemptRecord], last_error: Optional[Exception],
               category: Optional[str] = None) -> AllProvidersFailedError:
    label = f" {category}" if category else ""
    return AllProvidersFailedError(
        f"All {len(attempts)}{label} models failed, please try again later",
        attempts,
        last_error,
        category=category,
    )


def generate_with_fallback(router: LLMRouter, messages: MessagesInput, primary_provider: str,
                           primary_model: Optional[str] = None,
                           config: Optional[LLMRoutingConfig] = None) -> FallbackResult:
    """
    Try the primary model, then its fallback chain, one provider call each.

    Every failed attempt moves on to the next entry; the chain itself is
    already restricted to providers with keys.

    Args:
        router: Router providing the single-call primitive
        messages: Conversation messages
        primary_provider: User's preferred provider
        primary_model: User's preferred model (optional)
        config: Routing config snapshot

    Returns:
        FallbackResult describing which model answered

    Raises:
        LLMConfigurationError: If the chain is empty
        AllProvidersFailedError: If every attempt failed
    """
    config = router.resolve_config(config)
    chain = build_attempt_chain(primary_provider, primary_model, config)
    if not chain:
        raise LLMConfigurationError("No AI providers configured for fallback")

    limit = min(len(chain), MAX_ATTEMPTS)
    attempts: List[AttemptRecord] = []
    last_error: Optional[Exception] = None

    for i, candidate in enumerate(chain[:limit]):
        logger.info(f"[Fallback] Attempt {i + 1}/{limit}: {candidate.display_name}")
        try:
            result = router.call_provider(candidate.provider, messages, candidate.model, config)
        except Exception as e:
            router.log_failure(candidate.provider, candidate.model, e, config, "[Fallback]")
            attempts.append(AttemptRecord(candidate.provider, candidate.model, str(e)))
            last_error = e
            continue

        logger.info(f"[Fallback] Success with {candidate.display_name}")
        return FallbackResult(
            reply=result.reply,
            provider_used=result.provider_used,
            model_used=result.model_used,
            attempt_count=i + 1,
            fallback_used=i > 0,
        )

    raise _exhausted(attempts, last_error)


def _with_instruction(messages: List[LLMMessage], instruction: str) -> List[LLMMessage]:
    if messages and messages[0].role == "system":
        first = LLMMessage(role="system", content=messages[0].content + "\n\n" + instruction)
        return [first] + messages[1:]
    return [LLMMessage(role="system", content=instruction)] + messages


def generate_with_smart_fallback(router: LLMRouter, messages: MessagesInput,
                                 user_language: str = "vi",
                                 config: Optional[LLMRoutingConfig] = None) -> SmartFallbackResult:
    """
    Pick models by the length of the latest user message and fall back
    within that category (long -> long, short -> short).

    The narrative instruction for the category is appended to the system
    message of a copy of the conversation.
    """
    config = router.resolve_config(config)
    messages = coerce_messages(messages)

    user_turns = [m for m in messages if m.role == "user"]
    latest = user_turns[-1].content if user_turns else ""
    selection = select_model_for_message(latest)
    category = selection.category.value
    max_tokens = get_recommended_max_tokens(selection.category)
    temperature = get_recommended_temperature(selection.category)

    logger.info(
        f"[Smart Fallback] Category: {category} | Words: {selection.word_count} | "
        f"MaxTokens: {max_tokens} | Temperature: {temperature}"
    )

    enhanced = _with_instruction(messages, get_narrative_instruction(selection.category, user_language))
    available = [
        m for m in selection.models
        if m.provider in router.providers and has_key(m.provider, config)
    ]
    if not available:
        raise LLMConfigurationError("No models available with valid API keys")

    limit = min(len(available), MAX_ATTEMPTS)
    attempts: List[AttemptRecord] = []
    last_error: Optional[Exception] = None

    for i, model_config in enumerate(available[:limit]):
        logger.info(f"[Smart Fallback] Attempt {i + 1}/{limit}: {model_config.display_name}")
        try:
            result = router.call_provider(model_config.provider, enhanced, model_config.model_name, config)
        except Exception as e:
            router.log_failure(model_config.provider, model_config.model_name, e, config, "[Smart Fallback]")
            attempts.append(AttemptRecord(model_config.provider, model_config.model_name, str(e)))
            last_error = e
            continue

        logger.info(
            f"[Smart Fallback] Success with {model_config.display_name}, "
            f"length: {len(result.reply)} chars"
        )
        return SmartFallbackResult(
            reply=result.reply,
            provider_used=result.provider_used,
            model_used=result.model_used,
            attempt_count=i + 1,
            fallback_used=i > 0,
            category=category,
            word_count=selection.word_count,
            max_tokens_used=max_tokens,
        )

    raise _exhausted(attempts, last_error, category)
