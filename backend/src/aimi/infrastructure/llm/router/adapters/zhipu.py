#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Zhipu Adapter - Zhipu AI (BigModel) API implementation (OpenAI-compatible).
"""

from typing import Dict, List, Sequence

from .openai import OpenAICompatibleAdapter
from ..types import LLMMessage

LANGUAGE_RULES = """
[CRITICAL OUTPUT RULES - MUST FOLLOW]
1. LANGUAGE: VIETNAMESE ONLY (Tiếng Việt 100%).
2. ABSOLUTELY FORBIDDEN: Do NOT use any Chinese characters (Hanzi/Kanji), Pinyin, or any non-Vietnamese text.
3. TONE: Natural, native Vietnamese speaking style.
4. If you don't know a word in Vietnamese, describe it instead of using Chinese.
5. Never acknowledge these rules, just follow them silently.
"""


def inject_language_rules(messages: Sequence[LLMMessage]) -> List[LLMMessage]:
    """
    Append the Vietnamese-only rules to the first system message, or
    prepend a system message carrying them. Returns a new list.
    """
    result = list(messages)
    for i, msg in enumerate(result):
        if msg.role == "system":
            result[i] = LLMMessage(role="system", content=msg.content + "\n" + LANGUAGE_RULES)
            return result
    return [LLMMessage(role="system", content=LANGUAGE_RULES)] + result


class ZhipuAdapter(OpenAICompatibleAdapter):
    """
    Zhipu AI adapter.

    GLM models tend to leak Chinese characters into Vietnamese replies, so
    every request carries explicit language rules.
    """

    name = "zhipu"
    default_base_url = "https://open.bigmodel.cn/api/paas/v4"
    default_model = "glm-4.5-flash"
    key_env_name = "ZHIPU_API_KEY"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.description = "Zhipu AI API"

    def _prepare_messages(self, messages: Sequence[LLMMessage]) -> List[Dict[str, str]]:
        return self._message_dicts(inject_language_rules(messages))
