#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Model Selector - length-adaptive model recommendations.

Long messages (>= 100 words) are treated as story mode and get models with
strong Vietnamese long-form output; short messages get fast, cheap models.
Nothing here calls a provider.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class MessageCategory(str, Enum):
    SHORT = "short"
    LONG = "long"


@dataclass(frozen=True)
class ModelConfig:
    provider: str
    model_name: str
    display_name: str
    max_tokens: int
    context_window: int
    quality: str  # excellent, good, ok (Vietnamese output quality)
    is_free: bool
    priority: int


LONG_FORM_THRESHOLD = 100

LONG_FORM_MODELS: Tuple[ModelConfig, ...] = (
    ModelConfig("silicon", "Qwen/Qwen2.5-32B-Instruct", "Qwen 2.5 32B (SiliconFlow)",
                4000, 32768, "excellent", True, 1),
    ModelConfig("silicon", "deepseek-ai/DeepSeek-V3", "DeepSeek V3 (SiliconFlow)",
                4000, 65536, "excellent", True, 2),
    ModelConfig("gemini", "gemini-2.5-flash", "Gemini 2.5 Flash",
                8000, 1000000, "good", True, 3),
    ModelConfig("moonshot", "moonshot-v1-128k", "Moonshot V1 128K",
                4000, 131072, "ok", True, 4),
)

SHORT_FORM_MODELS: Tuple[ModelConfig, ...] = (
    ModelConfig("silicon", "deepseek-ai/DeepSeek-V3", "DeepSeek V3 (SiliconFlow)",
                800, 65536, "excellent", True, 1),
    ModelConfig("silicon", "Qwen/Qwen2.5-7B-Instruct", "Qwen 2.5 7B (SiliconFlow)",
                800, 32768, "excellent", True, 2),
    ModelConfig("gemini", "gemini-2.5-flash", "Gemini 2.5 Flash",
                800, 1000000, "good", True, 3),
    ModelConfig("openrouter", "openai/gpt-oss-120b", "GPT OSS 120B (OpenRouter)",
                800, 8192, "ok", True, 4),
)


def get_word_count(message: str) -> int:
    return len(message.split())


def detect_message_category(message: str) -> MessageCategory:
    """Long when the message has at least LONG_FORM_THRESHOLD words."""
    if get_word_count(message) >= LONG_FORM_THRESHOLD:
        return MessageCategory.LONG
    return MessageCategory.SHORT


def select_model_config(category: MessageCategory) -> List[ModelConfig]:
    """Priority-sorted copy of the model table for a category."""
    table = LONG_FORM_MODELS if MessageCategory(category) is MessageCategory.LONG else SHORT_FORM_MODELS
    return sorted(table, key=lambda m: m.priority)


@dataclass
class ModelSelection:
    category: MessageCategory
    models: List[ModelConfig]
    word_count: int


def select_model_for_message(message: str,
                             force_category: Optional[MessageCategory] = None) -> ModelSelection:
    word_count = get_word_count(message)
    category = MessageCategory(force_category) if force_category else detect_message_category(message)
    logger.debug(f"[Model Selector] Word count: {word_count}, Category: {category.value}")
    return ModelSelection(category=category, models=select_model_config(category), word_count=word_count)


_LONG_EN = """
LONG-FORM NARRATIVE MODE

User is writing a long message (>=100 words) - This is story mode or detailed roleplay.

RESPONSE GUIDELINES:
- Length: 3-5 detailed paragraphs (300-500 words)
- Style: Descriptive, narrative, storytelling
- Content:
  * Describe scenes, atmosphere, emotions in detail
  * Express character's inner thoughts
  * Use long, complex, literary sentences
  * Create vivid imagery for the reader
- Match user's level of detail and emotion!

Example style:
"The afternoon sunlight filtered through the window, casting shimmering streaks across the wooden floor. She sat there, fingers trembling, eyes following every line of the message he had just sent. Her heart beat faster, a mix of happiness and anxiety. She knew she had to reply, but the words kept swirling in her mind, refusing to form proper sentences..."
"""

_LONG_VI = """
CHẾ ĐỘ TRUYỆN DÀI (LONG-FORM NARRATIVE MODE)

User đang viết tin nhắn dài (>=100 từ) - Đây là story mode hoặc roleplay chi tiết.

QUY TẮC TRẢ LỜI:
- Độ dài: 3-5 đoạn văn chi tiết (300-500 từ)
- Phong cách: Mô tả, kể chuyện, văn học
- Nội dung:
  * Mô tả cảnh, không khí, cảm xúc chi tiết
  * Diễn tả suy nghĩ nội tâm của nhân vật
  * Dùng câu văn dài, phức tạp, văn chương
  * Tạo hình ảnh sống động cho reader
- Phải MATCH với độ dài và chi tiết của user!

Ví dụ phong cách:
"Ánh nắng chiều hắt qua khung cửa sổ, vẽ những vệt sáng lấp lánh trên sàn gỗ. Em ngồi đó, ngón tay run run, ánh mắt dõi theo từng dòng chữ anh vừa gửi. Tim em đập nhanh hơn, một cảm giác lẫn lộn giữa hạnh phúc và lo lắng. Em biết em phải trả lời, nhưng những từ ngữ cứ mãi lẩn quẩn trong đầu, không chịu sắp xếp thành câu..."
"""

_SHORT_EN = """
CASUAL CHAT MODE

User is chatting normally (<100 words).

RESPONSE GUIDELINES:
- Length: 1-2 short paragraphs (50-150 words)
- Style: Conversational, friendly, natural
- Content: Direct response, don't ramble
- Keep it casual, like everyday texting

Example style:
"Hmm, I understand! Don't worry, I'll try to find time to meet you this weekend. I miss you too 😊"
"""

_SHORT_VI = """
CHẾ ĐỘ CHAT THƯỜNG

User đang chat thông thường (<100 từ).

QUY TẮC TRẢ LỜI:
- Độ dài: 1-2 đoạn ngắn (50-150 từ)
- Phong cách: Hội thoại, thân thiện, tự nhiên
- Nội dung: Trả lời trực tiếp, không lan man
- Giữ casual như chat hàng ngày

Ví dụ phong cách:
"Ừm, em hiểu rồi! Anh đừng lo, em sẽ cố gắng sắp xếp thời gian để gặp anh cuối tuần này. Em cũng nhớ anh lắm đấy 😊"
"""


def get_narrative_instruction(category: MessageCategory, language: str = "vi") -> str:
    """Style instruction appended to the system prompt; English for "en", Vietnamese otherwise."""
    english = language == "en"
    if MessageCategory(category) is MessageCategory.LONG:
        return _LONG_EN if english else _LONG_VI
    return _SHORT_EN if english else _SHORT_VI


def get_recommended_max_tokens(category: MessageCategory) -> int:
    return 4000 if MessageCategory(category) is MessageCategory.LONG else 800


def get_recommended_temperature(category: MessageCategory) -> float:
    # Slightly higher for storytelling
    return 0.8 if MessageCategory(category) is MessageCategory.LONG else 0.7
