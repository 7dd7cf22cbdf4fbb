"""Interactive review loop: accept, edit, retry with more context, or reject."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

from .analyzer import AnalysisResult, PromptAnalyzer
from .exceptions import AnalysisError, OutputError
from .models import OutputDestination
from .output import OutputResult, format_and_output

logger = logging.getLogger("refiner")


class ReviewAction(str, Enum):
    ACCEPT = "accept"
    EDIT = "edit"
    RETRY = "retry"
    REJECT = "reject"


@dataclass
class ReviewResult:
    action: ReviewAction
    edited_prompt: str | None = None
    additional_context: str | None = None


_ACTION_CHOICES = [
    (ReviewAction.ACCEPT, "Accept - Send the prompt to its destination and finish"),
    (ReviewAction.EDIT, "Edit - Modify the structured prompt"),
    (ReviewAction.RETRY, "Retry - Regenerate with additional context"),
    (ReviewAction.REJECT, "Reject - Discard and exit"),
]


class ReviewUI:
    """Terminal rendering and prompts for the review loop."""

    def show_comparison(self, result: AnalysisResult, retry_mode: bool = False) -> None:
        rule = click.style("=" * 80, fg="cyan")
        fmt = result.output_format.value.upper()
        click.echo("\n" + rule)
        if retry_mode:
            # Only the new prompt after a retry, the original was shown already
            click.secho("UPDATED PROMPT (RETRY)".center(80), fg="cyan", bold=True)
            click.echo(rule)
            click.secho(f"\nUPDATED STRUCTURED PROMPT ({fmt}):", fg="green", bold=True)
        else:
            click.secho("PROMPT COMPARISON".center(80), fg="cyan", bold=True)
            click.echo(rule)
            click.secho("\nORIGINAL PROMPT:", fg="yellow", bold=True)
            click.secho("─" * 50, dim=True)
            click.echo(result.original_prompt)
            click.secho(f"\nSTRUCTURED PROMPT ({fmt}):", fg="green", bold=True)
        click.secho("─" * 50, dim=True)
        click.echo(result.structured_prompt)
        click.echo("\n" + rule)

    def get_review_action(self, result: AnalysisResult) -> ReviewResult:
        click.echo("\nWhat would you like to do?")
        for i, (_, label) in enumerate(_ACTION_CHOICES, 1):
            click.echo(f"  {i}. {label}")
        choice = click.prompt(
            "Choice", type=click.IntRange(1, len(_ACTION_CHOICES)), default=1
        )
        action = _ACTION_CHOICES[choice - 1][0]

        if action is ReviewAction.EDIT:
            return self._handle_edit(result.structured_prompt)
        if action is ReviewAction.RETRY:
            return self._handle_retry()
        if action is ReviewAction.REJECT:
            return self._handle_reject(result)
        return ReviewResult(ReviewAction.ACCEPT)

    def _handle_edit(self, current: str) -> ReviewResult:
        click.secho("\nEdit Mode", fg="yellow")
        click.secho(
            "The current structured prompt is loaded in your editor. Save and close when done.",
            dim=True,
        )
        edited = click.edit(current)
        # None means the editor was closed without saving
        if edited is None:
            return ReviewResult(ReviewAction.EDIT)
        return ReviewResult(ReviewAction.EDIT, edited_prompt=edited.strip())

    def _handle_retry(self) -> ReviewResult:
        click.secho("\nRetry Mode", fg="blue")
        click.secho(
            "Provide additional context to improve the prompt generation.", dim=True
        )
        while True:
            context = click.prompt("Additional context or requirements").strip()
            if context:
                return ReviewResult(ReviewAction.RETRY, additional_context=context)
            click.echo("Please provide some additional context.")

    def _handle_reject(self, result: AnalysisResult) -> ReviewResult:
        click.secho("\nReject Mode", fg="red")
        if click.confirm(
            "Are you sure you want to discard this prompt and exit?", default=False
        ):
            return ReviewResult(ReviewAction.REJECT)
        return self.get_review_action(result)

    def show_success_message(self, output: OutputResult) -> None:
        if output.destination is OutputDestination.CLIPBOARD:
            click.secho("\nPrompt copied to clipboard successfully!", fg="green")
            click.secho("You can now paste it into your AI tool of choice.", dim=True)
        else:
            click.secho("\nPrompt saved successfully!", fg="green")
        if output.file_path:
            click.secho(f"Saved to: {output.file_path}", fg="blue")

    def show_error_message(self, message: str) -> None:
        click.secho(f"\nError: {message}", fg="red")

    def show_cancel_message(self) -> None:
        click.secho("\nOperation cancelled. No changes made.", fg="yellow")


async def run_review_loop(
    result: AnalysisResult,
    analyzer: PromptAnalyzer,
    destination: OutputDestination | str,
    ui: ReviewUI | None = None,
    out_dir: str | Path | None = None,
) -> AnalysisResult | None:
    """Loop until the user accepts or rejects.

    Returns the accepted result, or None when rejected. A failed retry keeps
    the previous result so the user can try again.
    """
    ui = ui or ReviewUI()
    destination = OutputDestination(destination)
    current = result
    retry_mode = False

    while True:
        ui.show_comparison(current, retry_mode=retry_mode)
        review = ui.get_review_action(current)

        if review.action is ReviewAction.ACCEPT:
            try:
                output = format_and_output(current, destination, out_dir=out_dir)
            except OutputError as e:
                ui.show_error_message(str(e))
            else:
                ui.show_success_message(output)
            return current

        if review.action is ReviewAction.EDIT:
            if review.edited_prompt:
                current = dataclasses.replace(
                    current, structured_prompt=review.edited_prompt
                )
                retry_mode = False
        elif review.action is ReviewAction.RETRY:
            if review.additional_context:
                click.secho("\nRegenerating with your context...", fg="cyan")
                try:
                    current = await analyzer.regenerate_with_context(
                        current, review.additional_context
                    )
                    click.secho("Regeneration complete!", fg="green")
                    retry_mode = True
                except AnalysisError as e:
                    logger.debug("Regeneration failed", exc_info=True)
                    ui.show_error_message(str(e))
        else:
            ui.show_cancel_message()
            return None
