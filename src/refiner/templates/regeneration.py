"""Instruction text for regenerating a structured prompt with extra context."""

from __future__ import annotations


def build_regeneration_prompt(
    original_prompt: str, structured_prompt: str, additional_context: str
) -> str:
    return f"""REGENERATION REQUEST: produce a substantially different and improved version of the structured prompt.

Original user prompt: "{original_prompt}"

Previously generated structured prompt:
{structured_prompt}

Additional user requirements and context to incorporate:
{additional_context}

Instructions:
1. Build a fresh structured prompt that works the additional context into every relevant section
2. Do not copy or lightly edit the previous version
3. Expand on details and consider alternative approaches that better serve the goal
4. Keep exactly the same JSON fields and format rules as before"""
