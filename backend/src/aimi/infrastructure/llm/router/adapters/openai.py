#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OpenAI-compatible Adapter - shared chat/completions implementation.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .base import BaseLLMAdapter
from .....core.settings import LLMRoutingConfig
from ..types import LLMException, LLMMessage

logger = logging.getLogger(__name__)


class OpenAICompatibleAdapter(BaseLLMAdapter):
    """
    Adapter for any provider speaking the OpenAI chat/completions format.

    Subclasses only set name, default_base_url, default_model and
    key_env_name, and may override _prepare_messages or _extra_headers.
    """

    name = "openai"
    default_base_url = "https://api.openai.com/v1"
    default_model = "gpt-4o-mini"
    key_env_name = "OPENAI_API_KEY"
    temperature = 0.7
    max_tokens = 1000

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "OpenAI-compatible API"

    def generate_response(self, messages: Sequence[LLMMessage], model: Optional[str] = None,
                          *, config: Optional[LLMRoutingConfig] = None) -> str:
        config = self._config(config)
        api_key = self._get_api_key(config)
        model = self.resolve_model(model, config)

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        headers.update(self._extra_headers(config))
        payload = self._build_payload(messages, model)
        url = f"{self._get_base_url(config)}/chat/completions"

        logger.debug(f"[{self.name}] Calling model: {model}")
        data = self._post_json(url, payload, headers, config)
        content = self._extract_content(data)
        logger.debug(f"[{self.name}] Success with {model}, length: {len(content)}")
        return content

    def _build_payload(self, messages: Sequence[LLMMessage], model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": self._prepare_messages(messages),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def _prepare_messages(self, messages: Sequence[LLMMessage]) -> List[Dict[str, str]]:
        return self._message_dicts(messages)

    def _extra_headers(self, config: LLMRoutingConfig) -> Dict[str, str]:
        return {}

    def _extract_content(self, data: Dict[str, Any]) -> str:
        """Pull the first choice's text; an empty string is passed through."""
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise LLMException("No choices in response", "format", self.name)
        message = (choices[0].get("message") or {}) if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise LLMException("Malformed choice in response", "format", self.name)
        content = message.get("content") or ""
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        if not isinstance(content, str):
            raise LLMException("Malformed message content in response", "format", self.name)
        return content.strip()
