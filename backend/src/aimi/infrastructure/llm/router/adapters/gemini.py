#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Gemini Adapter - Google Generative Language API (native generateContent).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .base import BaseLLMAdapter
from .....core.settings import LLMRoutingConfig
from ..types import LLMException, LLMInvalidRequestError, LLMMessage

logger = logging.getLogger(__name__)

# Sent when the conversation holds nothing but a system message
EMPTY_CONVERSATION_PROMPT = "Hãy bắt đầu một cuộc trò chuyện ngọt ngào bằng tiếng Việt với người yêu của bạn."


class GeminiAdapter(BaseLLMAdapter):
    """
    Gemini adapter using the native request shape.

    The first system message becomes ``systemInstruction``; assistant turns
    are sent with the ``model`` role.
    """

    name = "gemini"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"
    default_model = "gemini-2.5-flash"
    key_env_name = "GEMINI_API_KEY or GOOGLE_GENERATIVE_AI_API_KEY"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "Gemini API"

    def generate_response(self, messages: Sequence[LLMMessage], model: Optional[str] = None,
                          *, config: Optional[LLMRoutingConfig] = None) -> str:
        config = self._config(config)
        api_key = self._get_api_key(config)
        model = self.resolve_model(model, config)
        if model.startswith("models/"):
            model = model.split("/", 1)[1]
        if not messages:
            raise LLMInvalidRequestError("No messages provided to Gemini", self.name)

        url = f"{self._get_base_url(config)}/models/{model}:generateContent"
        headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}

        logger.debug(f"[gemini] Calling model: {model}")
        data = self._post_json(url, self._build_body(messages), headers, config)
        return self._extract_text(data)

    def _build_body(self, messages: Sequence[LLMMessage]) -> Dict[str, Any]:
        system_instruction: Optional[str] = None
        contents: List[Dict[str, Any]] = []
        for msg in messages:
            if msg.role == "system" and system_instruction is None:
                system_instruction = msg.content
                continue
            contents.append({
                "role": "model" if msg.role == "assistant" else "user",
                "parts": [{"text": msg.content}],
            })
        if not contents:
            logger.warning("[gemini] Empty contents, adding fallback user turn")
            contents.append({"role": "user", "parts": [{"text": EMPTY_CONVERSATION_PROMPT}]})

        body: Dict[str, Any] = {"contents": contents}
        if system_instruction:
            body["systemInstruction"] = {"role": "system", "parts": [{"text": system_instruction}]}
        return body

    def _extract_text(self, data: Dict[str, Any]) -> str:
        if not isinstance(data, dict):
            raise LLMException("Malformed Gemini response", "format", self.name)
        candidates = data.get("candidates") or [{}]
        first = candidates[0] if isinstance(candidates, list) else None
        content = (first.get("content") or {}) if isinstance(first, dict) else None
        if not isinstance(content, dict):
            raise LLMException("Malformed Gemini candidate", "format", self.name)
        parts = content.get("parts") or []
        if not isinstance(parts, list):
            raise LLMException("Malformed Gemini content parts", "format", self.name)
        texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
        return " ".join(texts).strip()
