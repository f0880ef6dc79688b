#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM Router Types - Value types and exceptions for provider routing.
"""

from typing import Any, Dict, List, Optional, Sequence, Union
from dataclasses import dataclass
from enum import Enum


class ProviderType(Enum):
    """Supported LLM providers."""
    SILICON = "silicon"
    GEMINI = "gemini"
    ZHIPU = "zhipu"
    MOONSHOT = "moonshot"
    DEEPSEEK = "deepseek"
    OPENROUTER = "openrouter"


# Sentinel meaning "let the router decide"
DEFAULT_PROVIDER = "default"

# Ceiling on provider calls per request, shared by every attempt path
MAX_ATTEMPTS = 3

PROVIDER_ALIASES: Dict[str, str] = {
    "google": ProviderType.GEMINI.value,
    "siliconflow": ProviderType.SILICON.value,
}

MESSAGE_ROLES = ("system", "user", "assistant")


def parse_provider(value: Optional[Union[str, ProviderType]]) -> Optional[str]:
    """
    Normalize a provider identifier.

    Returns the canonical provider name, ``DEFAULT_PROVIDER`` for the
    sentinel (or an empty value), and None for anything unrecognized.
    """
    if isinstance(value, ProviderType):
        return value.value
    if not value:
        return DEFAULT_PROVIDER
    name = str(value).strip().lower()
    if name == DEFAULT_PROVIDER:
        return DEFAULT_PROVIDER
    name = PROVIDER_ALIASES.get(name, name)
    if name in {p.value for p in ProviderType}:
        return name
    return None


@dataclass(frozen=True)
class LLMMessage:
    """Represents a single message in a conversation."""
    role: str  # system, user, assistant
    content: str

    def __post_init__(self):
        if self.role not in MESSAGE_ROLES:
            raise ValueError(f"Unsupported message role: {self.role}")

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def coerce(cls, value: Union["LLMMessage", Dict[str, Any]]) -> "LLMMessage":
        if isinstance(value, LLMMessage):
            return value
        return cls(role=value["role"], content=value["content"])


def coerce_messages(messages: Sequence[Union[LLMMessage, Dict[str, Any]]]) -> List[LLMMessage]:
    return [LLMMessage.coerce(m) for m in messages]


@dataclass(frozen=True)
class GenerateOptions:
    """Routing preference for a single generate call."""
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None


@dataclass(frozen=True)
class FallbackCandidate:
    """A (provider, model) pair with a label for logs."""
    provider: str
    model: str
    display_name: str


@dataclass(frozen=True)
class AttemptRecord:
    """One failed attempt, kept only to build the aggregated error."""
    provider: str
    model: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"provider": self.provider, "model": self.model, "error": self.error}


@dataclass
class GenerationResult:
    """Successful generation and where it came from."""
    reply: str
    provider_used: str
    model_used: str


@dataclass
class FallbackResult(GenerationResult):
    attempt_count: int = 1
    fallback_used: bool = False


@dataclass
class SmartFallbackResult(FallbackResult):
    category: str = "short"
    word_count: int = 0
    max_tokens_used: int = 0


class LLMException(Exception):
    """Base exception for LLM operations."""

    code = "LLM_ERROR"

    def __init__(self, message: str, error_type: str = "unknown",
                 provider: str = "", retryable: bool = False,
                 original_error: Optional[Exception] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.error_type = error_type
        self.provider = provider
        self.retryable = retryable
        self.original_error = original_error
        self.status_code = status_code


class LLMNetworkError(LLMException):
    """Network-related errors (timeouts, connection failures)."""

    def __init__(self, message: str, provider: str = "", original_error: Optional[Exception] = None):
        super().__init__(message, "network", provider, True, original_error)


class LLMRateLimitError(LLMException):
    """Rate limiting errors (429 responses)."""

    def __init__(self, message: str, provider: str = "", retry_after: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message, "rate_limit", provider, True, original_error, 429)
        self.retry_after = retry_after


class LLMServerError(LLMException):
    """Server-side errors (5xx responses)."""

    def __init__(self, message: str, provider: str = "", status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message, "server", provider, True, original_error, status_code)


class LLMInvalidRequestError(LLMException):
    """Client-side errors (4xx responses, invalid parameters)."""

    def __init__(self, message: str, provider: str = "", status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message, "invalid_request", provider, False, original_error, status_code)


class LLMAuthenticationError(LLMException):
    """Missing or rejected credentials."""

    code = "LLM_MISSING_KEY"

    def __init__(self, message: str, provider: str = "", status_code: Optional[int] = None):
        super().__init__(message, "authentication", provider, False, None, status_code)


class LLMConfigurationError(LLMException):
    """No usable provider configuration at all."""

    code = "LLM_NO_PROVIDERS"

    def __init__(self, message: str = "No AI providers configured"):
        super().__init__(message, "configuration", "", False)


class AllProvidersFailedError(LLMException):
    """Every candidate was tried and failed."""

    code = "LLM_ALL_PROVIDERS_FAILED"

    def __init__(self, message: str, attempts: Sequence[AttemptRecord],
                 last_error: Optional[Exception] = None,
                 category: Optional[str] = None):
        super().__init__(message, "exhausted", "", False, last_error)
        self.attempts: List[AttemptRecord] = list(attempts)
        self.last_error = last_error
        self.category = category

    @property
    def providers_tried(self) -> List[str]:
        return [f"{a.provider}/{a.model}" for a in self.attempts]


class EmptyReplyError(LLMException):
    """A provider call succeeded but returned no usable text."""

    code = "LLM_EMPTY_REPLY"

    def __init__(self, message: str, provider: str = "", model: str = ""):
        super().__init__(message, "empty_reply", provider, False)
        self.model = model

