#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Moonshot Adapter - Moonshot (Kimi) API implementation (OpenAI-compatible).
"""

from .openai import OpenAICompatibleAdapter


class MoonshotAdapter(OpenAICompatibleAdapter):
    name = "moonshot"
    default_base_url = "https://api.moonshot.cn/v1"
    default_model = "moonshot-v1-32k"
    key_env_name = "MOONSHOT_API_KEY"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "Moonshot API"
