#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM Router Adapters - Provider-specific implementations.
"""

from .base import BaseLLMAdapter
from .openai import OpenAICompatibleAdapter
from .siliconflow import SiliconFlowAdapter
from .deepseek import DeepSeekAdapter
from .gemini import GeminiAdapter
from .zhipu import ZhipuAdapter
from .moonshot import MoonshotAdapter
from .openrouter import OpenRouterAdapter

__all__ = [
    'BaseLLMAdapter',
    'OpenAICompatibleAdapter',
    'SiliconFlowAdapter',
    'DeepSeekAdapter',
    'GeminiAdapter',
    'ZhipuAdapter',
    'MoonshotAdapter',
    'OpenRouterAdapter',
]
