"""User-friendly error messages for common failures.

Maps refiner and provider errors to a short title, an explanation and
the steps that usually fix it.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import (
    AnalysisError,
    ConfigError,
    JsonRecoveryError,
    OutputError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ValidationError,
)


@dataclass
class FriendlyError:
    """A user-friendly error with a fix suggestion."""

    title: str
    message: str
    fix: str


def _find(error: BaseException, kind: type) -> BaseException | None:
    """First error of type ``kind`` along the ``raise ... from`` chain."""
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, kind):
            return current
        current = current.__cause__
    return None


def friendly_error(error: BaseException) -> FriendlyError:
    """Convert any error raised by a command into a friendly message."""
    import_error = _find(error, ImportError)
    if import_error is not None:
        return FriendlyError(
            title="Provider SDK not installed",
            message=str(import_error),
            fix=(
                "Install the extra named above, or every provider at once:\n"
                "pip install 'refiner-cli[all]'\n"
                "Or pick a model whose SDK is installed with --model."
            ),
        )

    auth_error = _find(error, ProviderAuthError)
    if auth_error is not None:
        return FriendlyError(
            title="API key rejected",
            message=str(auth_error),
            fix=(
                "Check the key for the selected model's provider:\n"
                "- OpenAI: OPENAI_API_KEY\n"
                "- Claude: CLAUDE_API_KEY or ANTHROPIC_API_KEY\n"
                "- Gemini: GEMINI_API_KEY or GOOGLE_API_KEY\n"
                "Or run 'refiner config' to store a new key."
            ),
        )

    rate_error = _find(error, ProviderRateLimitError)
    if rate_error is not None:
        return FriendlyError(
            title="Provider rate limit",
            message=str(rate_error),
            fix=(
                "Wait a minute and try again. If it keeps happening, check "
                "your plan's usage limits or pick another model with --model."
            ),
        )

    provider_error = _find(error, ProviderError)
    if provider_error is not None:
        msg = str(provider_error).lower()
        if "not found" in msg:
            return FriendlyError(
                title="Model not available",
                message=str(provider_error),
                fix="Run 'refiner info' to list supported models, then pass one with --model.",
            )
        if "safety" in msg:
            return FriendlyError(
                title="Blocked by safety filters",
                message=str(provider_error),
                fix="Rephrase the prompt and try again.",
            )
        return FriendlyError(
            title="AI provider error",
            message=str(provider_error),
            fix="This is usually temporary. Try again, or switch model with --model.",
        )

    recovery_error = _find(error, JsonRecoveryError)
    if recovery_error is not None:
        return FriendlyError(
            title="Unreadable model reply",
            message="The model's answer could not be read as JSON, even after repair.",
            fix=(
                "Try again, or use a different model with --model. "
                "Run with --verbose to see the raw reply."
            ),
        )

    config_error = _find(error, ConfigError)
    if config_error is not None:
        return FriendlyError(
            title="Configuration error",
            message=str(config_error),
            fix=(
                "Run 'refiner config' to reconfigure, or check "
                "~/.refiner/config.yaml for syntax errors. "
                "'refiner config --reset' restores the defaults."
            ),
        )

    validation_error = _find(error, ValidationError)
    if validation_error is not None:
        return FriendlyError(
            title="Invalid input",
            message=str(validation_error),
            fix="Run 'refiner --help' to see the accepted options.",
        )

    output_error = _find(error, OutputError)
    if output_error is not None:
        return FriendlyError(
            title="Could not deliver the prompt",
            message=str(output_error),
            fix=(
                "For the clipboard on Linux install wl-clipboard, xclip or xsel. "
                "Otherwise use --output file to save to ./refined-prompts/."
            ),
        )

    if isinstance(error, AnalysisError):
        return FriendlyError(
            title="Analysis failed",
            message=str(error),
            fix="Try again, or use a different model with --model.",
        )

    return FriendlyError(
        title="Unexpected error",
        message=str(error),
        fix="Run again with --verbose for details.",
    )


def format_friendly_error(err: FriendlyError) -> str:
    """Format a FriendlyError for display in the terminal."""
    lines = [
        f"Error: {err.title}",
        f"   {err.message}",
        "",
        "How to fix:",
    ]
    for line in err.fix.split("\n"):
        lines.append(f"   {line}")
    return "\n".join(lines)
