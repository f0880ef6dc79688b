#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DeepSeek Adapter - DeepSeek API implementation (OpenAI-compatible).
"""

from .openai import OpenAICompatibleAdapter


class DeepSeekAdapter(OpenAICompatibleAdapter):
    """DeepSeek native API."""

    name = "deepseek"
    default_base_url = "https://api.deepseek.com/v1"
    default_model = "deepseek-chat"
    key_env_name = "DEEPSEEK_API_KEY"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "DeepSeek API"
