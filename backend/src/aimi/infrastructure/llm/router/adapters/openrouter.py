#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OpenRouter Adapter - OpenRouter API implementation (OpenAI-compatible).
"""

from typing import Dict

from .openai import OpenAICompatibleAdapter
from .....core.settings import LLMRoutingConfig


class OpenRouterAdapter(OpenAICompatibleAdapter):
    """
    OpenRouter API adapter.

    OpenRouter asks for attribution headers (HTTP-Referer, X-Title) on
    every request.
    """

    name = "openrouter"
    default_base_url = "https://openrouter.ai/api/v1"
    default_model = "meta-llama/llama-3.3-70b-instruct"
    key_env_name = "OPENROUTER_API_KEY"
    temperature = 0.8
    app_title = "Aimi Chat"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "OpenRouter API"

    def _extra_headers(self, config: LLMRoutingConfig) -> Dict[str, str]:
        return {"HTTP-Referer": config.app_url, "X-Title": self.app_title}
