#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SiliconFlow Adapter - SiliconFlow API implementation (OpenAI-compatible).
"""

from .openai import OpenAICompatibleAdapter


class SiliconFlowAdapter(OpenAICompatibleAdapter):
    """
    SiliconFlow API adapter.

    SILICON_API_KEY may hold several comma separated keys; one is picked
    at random per call to spread quota across accounts.
    """

    name = "silicon"
    default_base_url = "https://api.siliconflow.cn/v1"
    default_model = "Qwen/Qwen2.5-7B-Instruct"
    key_env_name = "SILICON_API_KEY"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "SiliconFlow API"
