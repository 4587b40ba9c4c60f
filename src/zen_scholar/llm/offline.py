# src/zen_scholar/llm/offline.py

from __future__ import annotations


class OfflineLLMClient:
    """
    Offline deterministic LLM client used when no external API is configured.

    Echoes the prompt back with a hint on how to enable real replies.
    """

    def generate(self, prompt: str, system_instruction: str) -> str:
        return (
            "Offline demo mode: no assistant API is configured.\n"
            "Set ZEN_LLM_API_KEY (and optionally ZEN_LLM_MODELS) to enable real responses.\n\n"
            f"You said: {prompt.strip()}"
        )
