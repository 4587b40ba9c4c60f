# src/zen_scholar/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations,
so storage and LLM providers stay swappable and tests can inject fakes.
"""

from typing import Protocol


class LLMClient(Protocol):
    """
    Single-shot text generation.

    Implementations raise ConnectionError when the remote call cannot complete
    (auth, network, quota, malformed response).
    """

    def generate(self, prompt: str, system_instruction: str) -> str: ...


class KeyValueStore(Protocol):
    """String-valued key-value substrate used for persistence."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
