"""Recover a JSON value from a raw LLM response.

Stages, first success wins. Every stage parses with the strict ``json``
module; all leniency lives in the transformations before the parse.
  1. direct:    the stripped response as-is
  2. extracted: the candidate found by the extractor
  3. repaired:  that candidate after structural repair; when the response was
                cut off before the object balanced, everything from its first
                ``{`` is repaired instead
  4. legacy:    the response with one leading/trailing code fence removed
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..exceptions import JsonRecoveryError
from .extractor import extract
from .repairer import repair

logger = logging.getLogger("refiner")

# Longest excerpt of the failing text carried by JsonRecoveryError
SNIPPET_LIMIT = 200


def parse_response(response: str) -> Any:
    """Parse a model response into a JSON value.

    Raises JsonRecoveryError when every stage fails. Never returns partial data.
    """
    text = response.strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        failure = ("direct", text, e)

    candidate = extract(text)
    if candidate is not None:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.debug("Extracted JSON did not parse (%s), attempting repair", e)
    else:
        candidate = truncated_object(text)
        if candidate is not None:
            logger.debug("No balanced JSON object found, repairing truncated text")
        else:
            logger.debug("No JSON object found in response")

    if candidate is not None:
        repaired = repair(candidate)
        try:
            return json.loads(repaired)
        except json.JSONDecodeError as e:
            logger.debug("Repaired JSON did not parse: %s", e)
            failure = ("repaired", repaired, e)

    legacy = strip_code_fences(text)
    try:
        return json.loads(legacy)
    except json.JSONDecodeError as e:
        if candidate is None:
            failure = ("legacy", legacy, e)

    stage, failed_text, error = failure
    raise JsonRecoveryError(stage, _snippet(failed_text), str(error))


def truncated_object(text: str) -> str | None:
    """Everything from the first ``{``, for responses cut off mid-object."""
    start = text.find("{")
    if start == -1:
        return None
    return text[start:].strip()


def strip_code_fences(text: str) -> str:
    """Remove a single leading ```json / ``` marker and a single trailing ```."""
    if text.startswith("```json"):
        text = text[len("```json") :]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _snippet(text: str) -> str:
    return text[:SNIPPET_LIMIT]
