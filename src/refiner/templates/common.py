"""Shared pieces for the prompt template renderers."""

from __future__ import annotations

import json
import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

_LIST_MARKER_RE = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s+")


def strip_leading_list_marker(text: str) -> str:
    """Remove a leading "1.", "1)", "-", "*" or "•" marker."""
    return _LIST_MARKER_RE.sub("", text, count=1)


def _as_text(value: Any) -> str:
    # Models sometimes answer a prose field with a list or an object
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(str(item) for item in value)
    if isinstance(value, dict):
        return "\n".join(f"{key}: {item}" for key, item in value.items())
    return str(value)


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item not in (None, "")]
    return [str(value)]


TextField = Annotated[str, BeforeValidator(_as_text)]
ListField = Annotated[list[str], BeforeValidator(_as_list)]


class PromptData(BaseModel):
    """Base for records recovered from a model reply.

    Accepts the camelCase keys the model is asked to return as well as
    snake_case field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def bullet_list(items: list[str]) -> str:
    return "\n".join(f"- {strip_leading_list_marker(item)}" for item in items)


def numbered_list(items: list[str]) -> str:
    return "\n".join(
        f"{i}. {strip_leading_list_marker(item)}" for i, item in enumerate(items, 1)
    )


def to_pretty_json(structure: dict) -> str:
    return json.dumps(structure, indent=2, ensure_ascii=False)
