#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM API - generation and provider status endpoints.
"""

from typing import Any, Dict, List, Literal, Optional
from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel, Field
import logging

from ...core.settings import AppSettings, get_settings, load_routing_config
from ...infrastructure.llm.router.keys import provider_status
from ...infrastructure.llm.router.types import (
    DEFAULT_PROVIDER, AllProvidersFailedError, LLMConfigurationError, LLMException, LLMInvalidRequestError,
)
from ...services.llm_service import GenerationMode, LLMService, llm_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/llm", tags=["llm"])


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class GenerateRequest(BaseModel):
    """Request to generate a reply."""
    messages: List[ChatMessage] = Field(min_length=1)
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    mode: GenerationMode = GenerationMode.ROUTER
    language: str = "vi"


class GenerateResponse(BaseModel):
    """Reply plus which provider/model produced it."""
    reply: str
    provider_used: str
    model_used: str
    attempt_count: Optional[int] = None
    fallback_used: Optional[bool] = None
    category: Optional[str] = None
    word_count: Optional[int] = None
    max_tokens_used: Optional[int] = None


def get_llm_service() -> LLMService:
    return llm_service


def _status_for(error: LLMException) -> int:
    if isinstance(error, (LLMConfigurationError, AllProvidersFailedError)):
        return 503
    if isinstance(error, LLMInvalidRequestError):
        return 400
    return 502


def _error_detail(error: LLMException) -> Dict[str, Any]:
    detail: Dict[str, Any] = {"code": error.code, "message": str(error)}
    if error.provider:
        detail["provider"] = error.provider
    if isinstance(error, AllProvidersFailedError):
        detail["providers_tried"] = error.providers_tried
        detail["attempts"] = [a.to_dict() for a in error.attempts]
        if error.category:
            detail["category"] = error.category
    return detail


@router.post("/generate", response_model=GenerateResponse)
def generate(request: GenerateRequest, service: LLMService = Depends(get_llm_service)):
    """
    Generate a chat reply.

    Args:
        request: Messages, routing preference and generation mode

    Returns:
        Reply with provenance; errors carry a machine-readable code
    """
    messages = [m.model_dump() for m in request.messages]
    try:
        result = service.chat_reply(
            messages,
            provider=request.provider,
            model=request.model,
            mode=request.mode,
            language=request.language,
        )
    except LLMException as e:
        logger.warning(f"Generation failed: {e.code}")
        raise HTTPException(status_code=_status_for(e), detail=_error_detail(e))

    payload = {
        key: value for key, value in vars(result).items()
        if key in GenerateResponse.model_fields
    }
    return GenerateResponse(**payload)


@router.get("/status")
def status(x_admin_secret: Optional[str] = Header(default=None),
           settings: AppSettings = Depends(get_settings),
           service: LLMService = Depends(get_llm_service)):
    """
    Which providers are configured, without exposing keys.

    Available in development, or with X-Admin-Secret matching
    DEV_ADMIN_SECRET. Anything else gets a 404.
    """
    authorized = settings.is_dev or (
        bool(settings.dev_admin_secret) and x_admin_secret == settings.dev_admin_secret
    )
    if not authorized:
        raise HTTPException(status_code=404, detail="Not Found")

    config = load_routing_config()
    result = provider_status(config)
    result["adapters"] = service.llm_router.get_supported_providers(config)
    return result
