# src/zen_scholar/core/assistant.py

"""
Assistant session: a local transcript around a stateless text-generation call.

Key invariants:
- the transcript is append-only and starts with one seeded greeting,
- at most one collaborator call is in flight (state AWAITING_RESPONSE); a call
  that timed out still counts until its worker thread returns,
- only the latest user text is sent upstream; the transcript stays local,
- collaborator failures become an error-flagged model message, never an exception.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from .persona import CONNECTION_ERROR_REPLY, EMPTY_REPLY_FALLBACK, GREETING, get_system_instruction
from .ports import LLMClient

logger = logging.getLogger(__name__)

Role = Literal["user", "model"]

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    text: str
    is_error: bool = False


class SessionState(StrEnum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


class AssistantSession:
    def __init__(
        self,
        llm: LLMClient,
        *,
        system_instruction: str | None = None,
        timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._llm = llm
        self._system_instruction = system_instruction or get_system_instruction()
        self._timeout = timeout_seconds
        self._awaiting = False
        self._inflight: Future[str] | None = None
        # One worker: a blocking call that outlived its timeout keeps the slot.
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="zen-assistant")
        self._transcript: list[ChatMessage] = [ChatMessage(role="model", text=GREETING)]

    @property
    def state(self) -> SessionState:
        if self._awaiting or (self._inflight is not None and not self._inflight.done()):
            return SessionState.AWAITING_RESPONSE
        return SessionState.IDLE

    @property
    def is_busy(self) -> bool:
        return self.state is SessionState.AWAITING_RESPONSE

    @property
    def transcript(self) -> tuple[ChatMessage, ...]:
        return tuple(self._transcript)

    def _append(self, message: ChatMessage) -> ChatMessage:
        self._transcript.append(message)
        return message

    async def _call_llm(self, text: str) -> str:
        future = self._executor.submit(self._llm.generate, text, self._system_instruction)
        self._inflight = future
        # Cancelling the wrapper on timeout does not stop the worker thread;
        # self._inflight keeps the session busy until it returns.
        call = asyncio.wrap_future(future)
        if self._timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self._timeout)

    @staticmethod
    def _log_late_finish(future: Future[str]) -> None:
        logger.info("Timed-out assistant call finished; reply discarded.")

    async def send_user_message(self, text: str) -> ChatMessage | None:
        """
        Submit one user turn.

        Returns the appended model reply, or None when the submission is refused
        (blank text, or a previous call still pending).
        """
        if not text or not text.strip():
            return None
        if self.is_busy:
            logger.debug("Assistant busy; message rejected.")
            return None

        self._append(ChatMessage(role="user", text=text))
        self._awaiting = True

        try:
            reply = await self._call_llm(text)
        except TimeoutError:
            logger.warning("Assistant call timed out after %.1fs", self._timeout or 0.0)
            if self._inflight is not None:
                self._inflight.add_done_callback(self._log_late_finish)
            return self._append(ChatMessage(role="model", text=CONNECTION_ERROR_REPLY, is_error=True))
        except Exception as e:
            logger.warning("Assistant call failed: %s", e)
            logger.debug("Assistant failure details", exc_info=True)
            return self._append(ChatMessage(role="model", text=CONNECTION_ERROR_REPLY, is_error=True))
        else:
            if not reply or not reply.strip():
                reply = EMPTY_REPLY_FALLBACK
            return self._append(ChatMessage(role="model", text=reply))
        finally:
            self._awaiting = False
