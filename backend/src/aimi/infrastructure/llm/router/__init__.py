#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM Router - provider routing, fallback chains and model selection.
"""

from .core import LLMRouter, llm_router
from .adapters import (
    BaseLLMAdapter, OpenAICompatibleAdapter, SiliconFlowAdapter, DeepSeekAdapter,
    GeminiAdapter, ZhipuAdapter, MoonshotAdapter, OpenRouterAdapter,
)
from .candidates import build_candidates
from .errors import is_retriable
from .fallback import generate_with_fallback, generate_with_smart_fallback, get_fallback_chains
from .keys import has_key, provider_status
from .model_selector import MessageCategory, ModelConfig, detect_message_category, select_model_for_message
from .types import (
    AllProvidersFailedError, EmptyReplyError, GenerateOptions, GenerationResult,
    LLMConfigurationError, LLMException, LLMMessage, ProviderType,
)

__all__ = [
    'LLMRouter',
    'llm_router',
    'BaseLLMAdapter',
    'OpenAICompatibleAdapter',
    'SiliconFlowAdapter',
    'DeepSeekAdapter',
    'GeminiAdapter',
    'ZhipuAdapter',
    'MoonshotAdapter',
    'OpenRouterAdapter',
    'build_candidates',
    'is_retriable',
    'generate_with_fallback',
    'generate_with_smart_fallback',
    'get_fallback_chains',
    'has_key',
    'provider_status',
    'MessageCategory',
    'ModelConfig',
    'detect_message_category',
    'select_model_for_message',
    'AllProvidersFailedError',
    'EmptyReplyError',
    'GenerateOptions',
    'GenerationResult',
    'LLMConfigurationError',
    'LLMException',
    'LLMMessage',
    'ProviderType',
]
