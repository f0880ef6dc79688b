#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM Router Core - Central routing and orchestration for LLM calls.
"""

import time
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ....core.settings import LLMRoutingConfig, load_routing_config
from .adapters.base import BaseLLMAdapter
from .adapters.siliconflow import SiliconFlowAdapter
from .adapters.gemini import GeminiAdapter
from .adapters.zhipu import ZhipuAdapter
from .adapters.moonshot import MoonshotAdapter
from .adapters.deepseek import DeepSeekAdapter
from .adapters.openrouter import OpenRouterAdapter
from .candidates import build_candidates
from .errors import is_retriable
from .keys import has_key
from .types import (
    AllProvidersFailedError, AttemptRecord, GenerateOptions, GenerationResult,
    LLMConfigurationError, LLMInvalidRequestError, LLMMessage, MAX_ATTEMPTS, coerce_messages,
)

logger = logging.getLogger(__name__)

MessagesInput = Sequence[Union[LLMMessage, Dict[str, Any]]]


class LLMRouter:
    """
    Central LLM router with adapter registry.

    Features:
    - Multi-provider support behind one generate_response interface
    - Preferred provider first, then configured fallbacks
    - Retriable errors advance to the next candidate, fatal errors propagate
    - At most MAX_ATTEMPTS provider calls per request
    - Verbose logging in development, provider-only logging in production
    """

    def __init__(self, adapters: Optional[Mapping[str, BaseLLMAdapter]] = None,
                 config_provider: Optional[Callable[[], LLMRoutingConfig]] = None):
        self._adapters: Dict[str, BaseLLMAdapter] = {}
        self._config_provider = config_provider or load_routing_config
        if adapters is None:
            self._register_default_adapters()
        else:
            for provider, adapter in adapters.items():
                self.register_adapter(provider, adapter)

    def _register_default_adapters(self):
        """Register built-in adapters."""
        for adapter in (
            SiliconFlowAdapter(),
            GeminiAdapter(),
            ZhipuAdapter(),
            MoonshotAdapter(),
            DeepSeekAdapter(),
            OpenRouterAdapter(),
        ):
            self.register_adapter(adapter.name, adapter)

    def register_adapter(self, provider: str, adapter: BaseLLMAdapter):
        """
        Register a new LLM adapter.

        Args:
            provider: Provider name (e.g., "silicon", "gemini")
            adapter: Adapter instance
        """
        self._adapters[provider] = adapter
        logger.debug(f"Registered LLM adapter: {provider}")

    @property
    def providers(self) -> List[str]:
        return list(self._adapters)

    def get_adapter(self, provider: str) -> BaseLLMAdapter:
        """
        Get adapter for the specified provider.

        Raises:
            LLMInvalidRequestError: If provider not registered
        """
        if provider not in self._adapters:
            available = list(self._adapters.keys())
            raise LLMInvalidRequestError(f"Unknown provider '{provider}'. Available: {available}", provider)
        return self._adapters[provider]

    def resolve_config(self, config: Optional[LLMRoutingConfig] = None) -> LLMRoutingConfig:
        """Use the given config or read a fresh one."""
        return config if config is not None else self._config_provider()

    def call_provider(self, provider: str, messages: MessagesInput, model: Optional[str] = None,
                      config: Optional[LLMRoutingConfig] = None) -> GenerationResult:
        """
        Call exactly one provider with one model, no fallback.

        Args:
            provider: Registered provider name
            messages: Conversation messages
            model: Model override, provider default when None
            config: Routing config snapshot

        Returns:
            GenerationResult for that provider/model

        Raises:
            LLMException: Whatever the adapter raised
        """
        config = self.resolve_config(config)
        messages = self._validate_messages(messages)
        adapter = self.get_adapter(provider)
        model = adapter.resolve_model(model, config)

        start_time = time.time()
        reply = adapter.generate_response(messages, model, config=config)
        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"LLM Response: {provider}:{model} latency={latency_ms}ms length={len(reply)}")
        return GenerationResult(reply=reply, provider_used=provider, model_used=model)

    def generate(self, messages: MessagesInput, options: Optional[GenerateOptions] = None,
                 config: Optional[LLMRoutingConfig] = None) -> GenerationResult:
        """
        Generate a reply, cascading through candidate providers.

        The reply is returned as the provider produced it; an empty reply is
        the caller's concern.

        Args:
            messages: Conversation messages, system message first if present
            options: Preferred provider and model
            config: Routing config snapshot, read fresh when None

        Returns:
            GenerationResult of the first successful candidate

        Raises:
            LLMConfigurationError: If no provider can be considered at all
            LLMException: The original error when it is fatal or fallback is off
            AllProvidersFailedError: If every candidate failed retriably
        """
        config = self.resolve_config(config)
        options = options or GenerateOptions()
        messages = self._validate_messages(messages)

        candidates = build_candidates(options.provider, config, known=self._adapters.keys())
        if not candidates:
            raise LLMConfigurationError()
        if len(candidates) > MAX_ATTEMPTS:
            logger.debug(f"[LLM Router] Capping {len(candidates)} candidates at {MAX_ATTEMPTS}")
            candidates = candidates[:MAX_ATTEMPTS]

        attempts: List[AttemptRecord] = []
        last_error: Optional[Exception] = None

        for index, provider in enumerate(candidates, start=1):
            adapter = self.get_adapter(provider)
            model = adapter.resolve_model(options.model, config)
            self._log_attempt(index, len(candidates), provider, model, options, config)
            try:
                result = self.call_provider(provider, messages, model, config)
            except Exception as e:
                self.log_failure(provider, model, e, config)
                if not config.enable_fallback:
                    logger.info("[LLM Router] Fallback disabled, re-raising")
                    raise
                if not is_retriable(e):
                    logger.info(f"[LLM Router] Error from {provider} is not retriable, re-raising")
                    raise
                attempts.append(AttemptRecord(provider=provider, model=model, error=str(e)))
                last_error = e
                continue

            logger.info(f"[LLM Router] Success with {provider}:{model}")
            return result

        error = AllProvidersFailedError(
            f"All {len(attempts)} LLM providers failed, please try again later",
            attempts,
            last_error,
        )
        logger.error(f"[LLM Router] All providers failed: {', '.join(error.providers_tried)}")
        raise error

    def _validate_messages(self, messages: MessagesInput) -> List[LLMMessage]:
        if not messages:
            raise LLMInvalidRequestError("Messages list cannot be empty")
        try:
            return coerce_messages(messages)
        except (KeyError, TypeError, ValueError) as e:
            raise LLMInvalidRequestError(f"Invalid message: {e}", original_error=e)

    def _log_attempt(self, index: int, total: int, provider: str, model: str,
                     options: GenerateOptions, config: LLMRoutingConfig):
        if config.verbose:
            logger.info(
                f"[LLM Router] Attempt {index}/{total}: {provider}:{model} "
                f"(preferred: {options.provider}, fallback: {config.enable_fallback})"
            )
        else:
            logger.info(f"[LLM Router] Trying provider: {provider}")

    def log_failure(self, provider: str, model: str, error: Exception, config: LLMRoutingConfig,
                    prefix: str = "[LLM Router]"):
        """Log a failed provider call; error text only in verbose mode, provider name otherwise."""
        if config.verbose:
            original = getattr(error, "original_error", None)
            logger.error(
                f"{prefix} Provider {provider}:{model} failed: "
                f"{type(error).__name__}: {error}"
                + (f" (cause: {original!r})" if original is not None else "")
            )
        else:
            logger.warning(f"{prefix} Provider {provider} failed")

    def get_supported_providers(self, config: Optional[LLMRoutingConfig] = None) -> Dict[str, Dict[str, Any]]:
        """
        Get information about registered providers.

        Returns:
            Dictionary mapping provider names to their info
        """
        config = self.resolve_config(config)
        providers = {}
        for provider_name, adapter in self._adapters.items():
            providers[provider_name] = {
                "name": provider_name,
                "class": adapter.__class__.__name__,
                "description": getattr(adapter, 'description', 'No description available'),
                "default_model": adapter.resolve_model(None, config),
                "has_key": has_key(provider_name, config),
            }
        return providers


# Global router instance
llm_router = LLMRouter()
