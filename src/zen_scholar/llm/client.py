# src/zen_scholar/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
import openai
from openai import OpenAI

logger = logging.getLogger(__name__)


def _is_auth_error(exc: Exception) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_rate_limit_error(exc: Exception) -> bool:
    return isinstance(exc, openai.RateLimitError)


def _is_connection_error(exc: Exception) -> bool:
    # APITimeoutError is a subclass of APIConnectionError.
    return isinstance(exc, (openai.APIConnectionError, httpx.TransportError))


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "Assistant is not configured (missing API key). Set ZEN_LLM_API_KEY in .env."
    if "LLM model list is empty" in msg:
        return "Assistant is not configured (no models). Set ZEN_LLM_MODELS in .env."
    if "LLM base URL is not set" in msg:
        return "Assistant is not configured (missing base URL). Set ZEN_LLM_BASE_URL in .env."
    return msg


def _extract_text(response: Any) -> str:
    """Pull the first choice's text out of a chat completion. Raises on a malformed shape."""
    choices = getattr(response, "choices", None)
    if not choices:
        raise ValueError("response has no choices")
    message = getattr(choices[0], "message", None)
    if message is None:
        raise ValueError("response choice has no message")
    content = getattr(message, "content", None)
    return (content or "").strip()


class OpenAICompatibleLLMClient:
    """
    Non-streaming chat completion against an OpenAI-compatible endpoint.

    Behavior:
    - Tries models in the order from settings (ZEN_LLM_MODELS).
    - 404 (model not available) or rate limit -> try next model.
    - Auth issues -> fail fast (no retries across models).
    - Every failure surfaces as ConnectionError.
    - SDK retries are disabled; the timeout is bounded by settings.
    """

    def __init__(self, settings: Any, *, client: Any | None = None) -> None:
        api_key = getattr(settings, "llm_api_key", None)
        base_url = str(getattr(settings, "llm_base_url", "") or "")
        self._models: list[str] = [
            m.strip() for m in (getattr(settings, "llm_models", None) or []) if m and m.strip()
        ]

        if not self._models:
            raise RuntimeError("LLM model list is empty. Set ZEN_LLM_MODELS in your .env.")

        if client is not None:
            self._client = client
            return

        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set ZEN_LLM_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set ZEN_LLM_BASE_URL in your .env.")

        read_s = float(getattr(settings, "llm_timeout_seconds", 30.0))
        connect_s = float(getattr(settings, "llm_connect_timeout_seconds", 5.0))

        self._client = OpenAI(
            base_url=base_url,
            api_key=str(api_key),
            timeout=httpx.Timeout(read_s, connect=connect_s),
            max_retries=0,
        )

    @property
    def models(self) -> list[str]:
        return list(self._models)

    def generate(self, prompt: str, system_instruction: str) -> str:
        last_error: Exception | None = None

        for model in self._models:
            logger.info("LLM: trying model=%s", model)
            t0 = time.monotonic()
            try:
                response = self._client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": "system", "content": system_instruction},
                        {"role": "user", "content": prompt},
                    ],
                )
                text = _extract_text(response)
                logger.info("LLM: reply from model=%s (%.2fs)", model, time.monotonic() - t0)
                return text

            except Exception as e:
                last_error = e

                if _is_auth_error(e):
                    raise ConnectionError(
                        "LLM authentication failed. Check your API key (ZEN_LLM_API_KEY)."
                    ) from e

                if _is_not_found_error(e):
                    logger.info("LLM: model not available (404): %s", model)
                    continue

                if _is_rate_limit_error(e):
                    logger.info("LLM: rate-limited on model=%s, trying next", model)
                    continue

                if _is_connection_error(e):
                    logger.info("LLM: network/timeout error on model=%s", model)
                    raise ConnectionError("LLM network/timeout error. Try again later.") from e

                logger.info("LLM: error on model=%s (%s)", model, e.__class__.__name__)
                raise ConnectionError(f"LLM request failed: {e.__class__.__name__}") from e

        if last_error is not None and _is_rate_limit_error(last_error):
            raise ConnectionError("LLM is rate-limited. Try again later.") from last_error
        raise ConnectionError("All LLM models failed.") from last_error
