"""Prompt construction for diagnostic translation requests."""

from __future__ import annotations


class PromptLibrary:
    """Build prompt strings for supported LLM tasks."""

    def translate_diagnostic_prompt(self, diagnostic_text: str, target_language: str) -> str:
        """Return the translation prompt for one compiler diagnostic line."""

        flattened = diagnostic_text.replace("\r\n", " ").replace("\n", " ").replace("```", "")
        return (
            "Translate the following English compiler diagnostic message into "
            f"{target_language} as plain text: {flattened}"
        )
