#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM Service - caller-facing entry point on top of the LLM router.

The router returns whatever text a provider produced. Deciding that an
empty reply is a failure happens here, in chat_reply.
"""

import logging
from enum import Enum
from typing import Optional

from ..core.settings import LLMRoutingConfig
from ..infrastructure.llm.router import llm_router
from ..infrastructure.llm.router.core import LLMRouter, MessagesInput
from ..infrastructure.llm.router.fallback import generate_with_fallback, generate_with_smart_fallback
from ..infrastructure.llm.router.types import (
    DEFAULT_PROVIDER, EmptyReplyError, GenerateOptions, GenerationResult,
)

logger = logging.getLogger(__name__)


class GenerationMode(str, Enum):
    ROUTER = "router"        # preferred provider + configured fallback providers
    FALLBACK = "fallback"    # preferred model + fixed fallback chain
    SMART = "smart"          # category-aware model list


class LLMService:
    """
    High-level LLM service used by chat and phone-content endpoints.

    Features:
    - One entry point for the three generation paths
    - Empty-reply detection for chat replies
    - Per-call logging of which provider/model answered
    """

    def __init__(self, router: Optional[LLMRouter] = None):
        self.llm_router = router or llm_router

    def generate(self, messages: MessagesInput, provider: str = DEFAULT_PROVIDER,
                 model: Optional[str] = None, mode: GenerationMode = GenerationMode.ROUTER,
                 language: str = "vi", config: Optional[LLMRoutingConfig] = None) -> GenerationResult:
        """
        Run one generation through the selected path.

        Args:
            messages: Conversation messages
            provider: Preferred provider or "default"
            model: Preferred model
            mode: Which generation path to use
            language: Reply language for the smart path ("en" or "vi")
            config: Routing config snapshot

        Returns:
            GenerationResult (or a FallbackResult / SmartFallbackResult subclass)
        """
        mode = GenerationMode(mode)
        if mode is GenerationMode.FALLBACK:
            return generate_with_fallback(self.llm_router, messages, provider or DEFAULT_PROVIDER,
                                          model, config)
        if mode is GenerationMode.SMART:
            return generate_with_smart_fallback(self.llm_router, messages, language, config)
        return self.llm_router.generate(messages, GenerateOptions(provider=provider or DEFAULT_PROVIDER,
                                                                  model=model), config)

    def chat_reply(self, messages: MessagesInput, provider: str = DEFAULT_PROVIDER,
                   model: Optional[str] = None, mode: GenerationMode = GenerationMode.ROUTER,
                   language: str = "vi", config: Optional[LLMRoutingConfig] = None) -> GenerationResult:
        """
        Generate a chat reply and reject empty or whitespace-only text.

        Raises:
            EmptyReplyError: If the provider answered with nothing usable
            LLMException: Anything the generation path raised
        """
        config = self.llm_router.resolve_config(config)
        try:
            result = self.generate(messages, provider, model, mode, language, config)
        except Exception as e:
            detail = f" - {e}" if config.verbose else ""
            logger.error(
                f"LLM call failed: provider={provider} model={model} mode={getattr(mode, 'value', mode)} "
                f"({type(e).__name__}){detail}"
            )
            raise

        if not result.reply or not result.reply.strip():
            logger.error(f"Empty AI response from {result.provider_used}:{result.model_used}")
            raise EmptyReplyError(
                "AI trả về câu trả lời rỗng, vui lòng nhắn lại.",
                result.provider_used,
                result.model_used,
            )

        logger.info(
            f"LLM call successful: {result.provider_used}:{result.model_used} "
            f"length={len(result.reply)}"
        )
        return result


# Global service instance
llm_service = LLMService()
