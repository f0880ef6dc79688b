# -*- coding: utf-8 -*-

from .router import LLMRouter, llm_router, GenerateOptions, GenerationResult, LLMMessage

__all__ = [
	"LLMRouter",
	"llm_router",
	"GenerateOptions",
	"GenerationResult",
	"LLMMessage",
]
