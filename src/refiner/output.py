"""Deliver the accepted structured prompt to the clipboard or a file."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .analyzer import AnalysisResult
from .clipboard import copy_text_to_clipboard
from .exceptions import OutputError
from .models import OutputDestination, OutputFormat

DEFAULT_OUTPUT_DIR = "refined-prompts"


@dataclass
class OutputResult:
    content: str
    destination: OutputDestination
    file_path: Path | None = None


def output_filename(
    prompt_type: str, output_format: OutputFormat, now: datetime | None = None
) -> str:
    """``<type>-prompt-<ISO timestamp>.<md|json>`` with ':' and '.' made file-safe."""
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    stamp = stamp.replace(":", "-").replace(".", "-")
    extension = "json" if output_format is OutputFormat.JSON else "md"
    return f"{prompt_type}-prompt-{stamp}.{extension}"


def format_and_output(
    result: AnalysisResult,
    destination: OutputDestination | str,
    out_dir: str | Path | None = None,
) -> OutputResult:
    """Send ``result.structured_prompt`` to ``destination``.

    The structured prompt is already rendered in its output format, so it is
    delivered as-is. Raises OutputError on failure.
    """
    destination = OutputDestination(destination)
    content = result.structured_prompt

    if destination is OutputDestination.CLIPBOARD:
        try:
            copy_text_to_clipboard(content)
        except (OSError, subprocess.CalledProcessError) as e:
            raise OutputError(f"Failed to copy to clipboard: {e}") from e
        return OutputResult(content=content, destination=destination)

    directory = Path(out_dir) if out_dir is not None else Path.cwd() / DEFAULT_OUTPUT_DIR
    file_path = directory / output_filename(
        result.prompt_type.value, result.output_format
    )
    try:
        directory.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to write to file: {e}") from e
    return OutputResult(content=content, destination=destination, file_path=file_path)


def create_side_by_side_comparison(
    original_prompt: str, structured_prompt: str, output_format: OutputFormat
) -> str:
    divider = "─" * 80
    title = "JSON Format" if output_format is OutputFormat.JSON else "Markdown Format"
    return (
        f"\n{divider}\nORIGINAL PROMPT\n{divider}\n{original_prompt}\n\n"
        f"{divider}\nSTRUCTURED PROMPT ({title})\n{divider}\n{structured_prompt}\n\n"
        f"{divider}"
    )


def format_for_preview(content: str, max_lines: int = 20) -> str:
    """Truncate ``content`` to ``max_lines`` with a note of what was cut."""
    lines = content.split("\n")
    if len(lines) <= max_lines:
        return content
    remaining = len(lines) - max_lines
    return "\n".join(lines[:max_lines]) + f"\n\n... ({remaining} more lines) ..."
