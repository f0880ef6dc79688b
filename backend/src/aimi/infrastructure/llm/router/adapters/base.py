#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base LLM Adapter - Abstract base class for all provider adapters.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
import json
import logging
import random

import httpx

from .....core.settings import LLMRoutingConfig, load_routing_config
from ..types import (
    LLMAuthenticationError, LLMException, LLMInvalidRequestError, LLMMessage,
    LLMNetworkError, LLMRateLimitError, LLMServerError,
)

logger = logging.getLogger(__name__)


class BaseLLMAdapter(ABC):
    """
    Abstract base class for LLM provider adapters.

    Each adapter turns a list of messages and an optional model override
    into generated text, or raises an LLMException subclass. Credentials,
    base URL and default model come from the routing config passed per call.
    """

    name = "base"
    default_base_url: Optional[str] = None
    default_model: Optional[str] = None
    key_env_name = "API_KEY"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize adapter with optional configuration.

        Args:
            api_key: Fixed API key, overrides the routing config
            base_url: Fixed base URL, overrides the routing config
            transport: httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.transport = transport
        self.description = "Base LLM Adapter"

    @abstractmethod
    def generate_response(self, messages: Sequence[LLMMessage], model: Optional[str] = None,
                          *, config: Optional[LLMRoutingConfig] = None) -> str:
        """
        Generate a reply from the provider.

        Args:
            messages: Conversation, system message first if present
            model: Model override; the provider default is used when None
            config: Routing config snapshot; loaded from the environment when None

        Returns:
            Generated text (may be empty, callers decide what that means)

        Raises:
            LLMException: For provider-specific errors
        """

    def resolve_model(self, model: Optional[str] = None,
                      config: Optional[LLMRoutingConfig] = None) -> str:
        if model:
            return model
        if config is not None and config.provider(self.name).default_model:
            return config.provider(self.name).default_model
        return self.default_model or "default-for-provider"

    def _config(self, config: Optional[LLMRoutingConfig]) -> LLMRoutingConfig:
        return config if config is not None else load_routing_config()

    def _get_api_key(self, config: LLMRoutingConfig) -> str:
        """
        Pick an API key: instance override first, then a random key from config.

        Raises:
            LLMAuthenticationError: If no key is configured
        """
        if self.api_key:
            return self.api_key
        keys = config.provider(self.name).api_keys
        if not keys:
            raise LLMAuthenticationError(
                f"{self.description} key not configured ({self.key_env_name})",
                self.name,
            )
        index = random.randrange(len(keys))
        logger.debug(f"[{self.name}] Key {index + 1}/{len(keys)}: {self._mask_key(keys[index])}")
        return keys[index]

    def _get_base_url(self, config: LLMRoutingConfig) -> str:
        url = self.base_url or config.provider(self.name).base_url or self.default_base_url
        return (url or "").rstrip("/")

    def _timeout(self, config: LLMRoutingConfig) -> httpx.Timeout:
        read = config.provider(self.name).timeout
        return httpx.Timeout(connect=min(read, 30.0), read=read, write=30.0, pool=30.0)

    def _post_json(self, url: str, payload: Dict[str, Any], headers: Dict[str, str],
                   config: LLMRoutingConfig) -> Dict[str, Any]:
        """
        POST a JSON body and return the decoded JSON response.

        Transport failures become LLMNetworkError, non-2xx statuses go
        through _handle_http_error.
        """
        timeout = self._timeout(config)
        try:
            with httpx.Client(timeout=timeout, transport=self.transport) as client:
                response = client.post(url, json=payload, headers=headers)
                if response.status_code >= 300:
                    raise self._handle_http_error(response.status_code, response.text, self.name)
                return response.json()
        except httpx.TimeoutException as e:
            raise LLMNetworkError(f"Network timeout after {timeout.read}s", self.name, e)
        except httpx.RemoteProtocolError as e:
            logger.warning(
                f"[{self.name}] Server disconnected, payload size: {len(str(payload))} chars"
            )
            raise LLMNetworkError("Network error: server disconnected without response", self.name, e)
        except httpx.TransportError as e:
            raise LLMNetworkError(f"Network error: {e}", self.name, e)
        except json.JSONDecodeError as e:
            raise LLMException(f"Invalid JSON response: {e}", "format", self.name, False, e)

    def _handle_http_error(self, status_code: int, response_text: str,
                           provider: str) -> LLMException:
        """
        Convert HTTP error to appropriate LLMException.

        Args:
            status_code: HTTP status code
            response_text: Response body text
            provider: Provider name

        Returns:
            Appropriate LLMException subclass
        """
        if status_code == 429:
            return LLMRateLimitError(f"Rate limit exceeded: {response_text}", provider)
        elif status_code in (401, 403):
            return LLMAuthenticationError(
                f"Authentication failed ({status_code}): {response_text}", provider, status_code
            )
        elif 400 <= status_code < 500:
            return LLMInvalidRequestError(
                f"Client error ({status_code}): {response_text}", provider, status_code
            )
        elif 500 <= status_code < 600:
            return LLMServerError(
                f"Server error ({status_code}): {response_text}", provider, status_code
            )
        else:
            return LLMException(
                f"HTTP error ({status_code}): {response_text}", "http", provider,
                status_code=status_code,
            )

    def _message_dicts(self, messages: Sequence[LLMMessage]) -> List[Dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in messages]

    @staticmethod
    def _mask_key(key: str) -> str:
        return "***" if len(key) <= 8 else f"{key[:5]}...{key[-3:]}"
