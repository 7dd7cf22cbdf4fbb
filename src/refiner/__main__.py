"""CLI entry point for refiner."""

from __future__ import annotations

import asyncio
import logging

import click

from . import __version__
from .exceptions import RefinerError
from .models import (
    MODELS,
    OutputDestination,
    OutputFormat,
    PromptFlavor,
    PromptType,
    prompt_type_for_model,
)

logger = logging.getLogger("refiner")

MIN_INTERACTIVE_PROMPT_LENGTH = 10

_TYPE_CHOICE = click.Choice([t.value for t in PromptType])
_MODEL_CHOICE = click.Choice(list(MODELS))
_FORMAT_CHOICE = click.Choice([f.value for f in OutputFormat])
_OUTPUT_CHOICE = click.Choice([d.value for d in OutputDestination])
_FLAVOR_CHOICE = click.Choice([f.value for f in PromptFlavor])

_COMMANDS = [
    ("brainstorm", "Interview a rough idea into a refined prompt"),
    ("config", "Configure defaults and API keys"),
    ("info", "Show this information"),
    ("refine", "Refine a prompt into structured output"),
]


# ── Helpers ──────────────────────────────────────────────


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _load(ctx: click.Context):
    from .config import load_config

    return load_config(ctx.obj.get("config_path"))


def _fail(error: Exception) -> None:
    """Print a friendly message for ``error`` and exit with status 1."""
    from .friendly_errors import format_friendly_error, friendly_error

    logger.debug("Command failed", exc_info=error)
    click.secho(format_friendly_error(friendly_error(error)), fg="red", err=True)
    raise SystemExit(1)


def _ask_text(message: str, too_short: str) -> str:
    while True:
        text = click.prompt(message).strip()
        if len(text) >= MIN_INTERACTIVE_PROMPT_LENGTH:
            return text
        click.echo(too_short)


def _show_configuration(**settings: object) -> None:
    click.secho("\nConfiguration:", fg="blue")
    for label, value in settings.items():
        click.secho(f"   {label.replace('_', ' ').title()}: {value}", dim=True)
    click.echo()


def _make_provider(model: str, config):
    """Build the provider, echoing streamed text when the model streams."""
    from .providers import create_provider

    def on_text(delta: str) -> None:
        click.echo(delta, nl=False)

    return create_provider(model, config, on_text=on_text)


def _pick(label: str, choices: list[tuple[str, str]], default: str) -> str:
    """Show numbered options and return the selected value."""
    click.echo(f"\n{label}:")
    default_index = 1
    for i, (value, desc) in enumerate(choices, 1):
        click.echo(f"  {i}. {desc}")
        if value == default:
            default_index = i
    choice = click.prompt(
        "Choice", type=click.IntRange(1, len(choices)), default=default_index
    )
    return choices[choice - 1][0]


async def _refine_flow(
    raw_prompt: str,
    analyzer,
    prompt_type: PromptType,
    output_format: OutputFormat,
    destination: OutputDestination,
    flavor: PromptFlavor,
) -> None:
    from .review import run_review_loop

    click.secho("Analyzing prompt structure...", fg="cyan")
    result = await analyzer.analyze_and_structure(
        raw_prompt, prompt_type, output_format, flavor
    )
    click.secho("Analysis complete!", fg="green")
    await run_review_loop(result, analyzer, destination)


# ── CLI Commands ─────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="refiner")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", default=None, help="Config file path")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Refiner: turn rough prompts into structured, AI-optimized prompts."""
    from .config import load_env

    _configure_logging(verbose)
    load_env()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.argument("prompt", required=False)
@click.option("--type", "-t", "prompt_type", type=_TYPE_CHOICE, default=None, help="Prompt type")
@click.option("--model", "-m", type=_MODEL_CHOICE, default=None, help="AI model to use")
@click.option("--format", "-f", "output_format", type=_FORMAT_CHOICE, default=None, help="Output format")
@click.option("--output", "-o", type=_OUTPUT_CHOICE, default=None, help="Output destination")
@click.option("--flavor", "-l", type=_FLAVOR_CHOICE, default=None, help="Prompt flavor")
@click.pass_context
def refine(
    ctx: click.Context,
    prompt: str | None,
    prompt_type: str | None,
    model: str | None,
    output_format: str | None,
    output: str | None,
    flavor: str | None,
) -> None:
    """Transform an unstructured prompt into a well-structured one."""
    from .analyzer import PromptAnalyzer

    try:
        config = _load(ctx)
    except RefinerError as e:
        _fail(e)

    if not prompt:
        click.secho("No prompt provided as argument.", fg="blue")
        prompt = _ask_text(
            "Enter your prompt to refine",
            "Prompt should be at least 10 characters long for meaningful analysis.",
        )

    model = model or config.default_model
    ptype = PromptType(prompt_type or config.default_type)
    fmt = OutputFormat(output_format or config.default_format)
    destination = OutputDestination(output or config.default_output)
    flv = PromptFlavor(flavor or config.default_flavor)
    _show_configuration(
        type=ptype.value,
        model=model,
        format=fmt.value,
        output=destination.value,
        flavor=flv.value,
    )

    try:
        analyzer = PromptAnalyzer(_make_provider(model, config), config)
        asyncio.run(_refine_flow(prompt, analyzer, ptype, fmt, destination, flv))
    except (RefinerError, ImportError) as e:
        _fail(e)


@main.command()
@click.argument("idea", required=False)
@click.option("--type", "-t", "prompt_type", type=_TYPE_CHOICE, default=None, help="Prompt type to optimize for")
@click.option("--model", "-m", type=_MODEL_CHOICE, default=None, help="AI model to use")
@click.option("--format", "-f", "output_format", type=_FORMAT_CHOICE, default=None, help="Output format")
@click.option("--output", "-o", type=_OUTPUT_CHOICE, default=None, help="Output destination")
@click.option("--flavor", "-l", type=_FLAVOR_CHOICE, default=None, help="Prompt flavor")
@click.option("--rounds", "-r", type=click.IntRange(0), default=3, show_default=True, help="Max Q&A rounds before synthesis")
@click.pass_context
def brainstorm(
    ctx: click.Context,
    idea: str | None,
    prompt_type: str | None,
    model: str | None,
    output_format: str | None,
    output: str | None,
    flavor: str | None,
    rounds: int,
) -> None:
    """Interactive Q&A that turns a rough idea into a refined prompt."""
    from .analyzer import PromptAnalyzer
    from .brainstormer import Brainstormer

    try:
        config = _load(ctx)
    except RefinerError as e:
        _fail(e)

    model = model or config.default_model
    # Without --type the model decides, as the interview is tuned per model
    ptype = PromptType(prompt_type) if prompt_type else prompt_type_for_model(model)
    fmt = OutputFormat(output_format or config.default_format)
    destination = OutputDestination(output or config.default_output)
    flv = PromptFlavor(flavor or config.default_flavor)

    if not idea:
        click.secho("No idea provided as argument.", fg="blue")
        idea = _ask_text(
            "Describe your rough idea (product, feature, bug, or initiative)",
            "Please add a bit more detail (at least 10 characters).",
        )

    _show_configuration(
        type=ptype.value,
        model=model,
        format=fmt.value,
        output=destination.value,
        flavor=flv.value,
        rounds=rounds,
    )

    try:
        provider = _make_provider(model, config)
        asyncio.run(
            _brainstorm_flow(
                idea,
                Brainstormer(provider, config),
                PromptAnalyzer(provider, config),
                ptype,
                fmt,
                destination,
                flv,
                rounds,
            )
        )
    except (RefinerError, ImportError) as e:
        _fail(e)


async def _brainstorm_flow(
    idea: str,
    brainstormer,
    analyzer,
    prompt_type: PromptType,
    output_format: OutputFormat,
    destination: OutputDestination,
    flavor: PromptFlavor,
    rounds: int,
) -> None:
    from .brainstormer import QAItem

    transcript: list[QAItem] = []
    for round_number in range(1, rounds + 1):
        click.secho(
            f"\nBrainstorming round {round_number}: generating questions...", fg="cyan"
        )
        try:
            nxt = await brainstormer.generate_next_questions(idea, transcript, prompt_type)
        except RefinerError as e:
            logger.debug("Question generation failed", exc_info=True)
            click.secho(f"Failed to generate questions, stopping Q&A: {e}", fg="yellow")
            break

        if not nxt.questions:
            break
        click.secho(f"Got {len(nxt.questions)} question(s).", fg="green")
        for question in nxt.questions:
            answer = click.prompt(question).strip()
            transcript.append(QAItem(question=question, answer=answer))
        if not nxt.should_continue:
            break

    click.secho("\nSynthesizing your answers into a single raw prompt...", fg="cyan")
    raw_prompt = await brainstormer.synthesize_raw_prompt(idea, transcript, prompt_type)
    click.secho("Synthesis complete.", fg="green")

    await _refine_flow(raw_prompt, analyzer, prompt_type, output_format, destination, flavor)


@main.command("config")
@click.option("--show", is_flag=True, help="Show current configuration and exit")
@click.option("--reset", is_flag=True, help="Reset configuration to defaults")
@click.pass_context
def config_cmd(ctx: click.Context, show: bool, reset: bool) -> None:
    """Configure defaults (model, type, format, destination) and API keys."""
    from .config import reset_config, save_config
    from .validation import validate_api_key

    config_path = ctx.obj.get("config_path")
    if reset:
        reset_config(config_path)
        click.secho("Configuration reset to defaults.", fg="green")
        return

    try:
        config = _load(ctx)
    except RefinerError as e:
        _fail(e)

    if show:
        _print_config(config)
        return

    click.secho("\nRefiner Configuration", fg="blue", bold=True)

    label = "Update" if config.api_key else "Set"
    if click.confirm(f"{label} OpenAI API key now?", default=False):
        while True:
            key = click.prompt("OpenAI API key (starts with sk-)", hide_input=True).strip()
            try:
                validate_api_key(key)
            except RefinerError as e:
                click.secho(str(e), fg="red")
                continue
            config.api_key = key
            break
    label = "Update" if config.claude_api_key else "Set"
    if click.confirm(f"{label} Claude API key now?", default=False):
        config.claude_api_key = click.prompt("Claude API key", hide_input=True).strip()
    label = "Update" if config.gemini_api_key else "Set"
    if click.confirm(f"{label} Gemini API key now?", default=False):
        config.gemini_api_key = click.prompt("Gemini API key", hide_input=True).strip()

    config.default_model = _pick(
        "Select default model",
        [(spec.id, spec.description) for spec in MODELS.values()],
        config.default_model,
    )
    inferred = prompt_type_for_model(config.default_model)
    config.default_type = PromptType(
        _pick(
            f"Select default prompt type (suggested: {inferred.value} for {config.default_model})",
            [("reasoning", "Reasoning"), ("generative", "Generative")],
            inferred.value,
        )
    )
    config.default_format = OutputFormat(
        _pick(
            "Select default output format",
            [("markdown", "Markdown"), ("json", "JSON")],
            config.default_format.value,
        )
    )
    config.default_output = OutputDestination(
        _pick(
            "Select default output destination",
            [("clipboard", "Clipboard"), ("file", "File (refined-prompts/*)")],
            config.default_output.value,
        )
    )
    config.default_flavor = PromptFlavor(
        _pick(
            "Select default prompt flavor",
            [("detailed", "Detailed"), ("compact", "Compact")],
            config.default_flavor.value,
        )
    )

    path = save_config(config, config_path)
    click.secho(f"\nConfiguration saved to {path}", fg="green")
    _print_config(config)


def _print_config(config) -> None:
    def key_state(value: str) -> str:
        return "set" if value else "not set"

    click.secho("\nCurrent configuration:", fg="blue")
    rows = [
        ("Default Model", config.default_model),
        ("Default Type", config.default_type.value),
        ("Default Format", config.default_format.value),
        ("Default Output", config.default_output.value),
        ("Default Flavor", config.default_flavor.value),
        ("OpenAI API Key", key_state(config.get_api_key("openai"))),
        ("Claude API Key", key_state(config.get_api_key("anthropic"))),
        ("Gemini API Key", key_state(config.get_api_key("google"))),
        (
            "Temperature (generative/reasoning)",
            f"{config.temperature.generative} / {config.temperature.reasoning}",
        ),
        ("Streaming", "on" if config.streaming.enabled else "off"),
    ]
    for label, value in rows:
        click.secho(f"   {label}: {value}", dim=True)
    click.echo()


@main.command()
def info() -> None:
    """Show product information and available commands."""
    click.secho("\nRefiner", fg="cyan", bold=True)
    click.secho("A prompt refining CLI for builders and teams.", dim=True)

    click.secho("\nProduct Information", fg="blue")
    click.secho("   Name: refiner", dim=True)
    click.secho(f"   Version: {__version__}", dim=True)

    click.secho("\nAvailable Commands", fg="blue")
    for name, hint in _COMMANDS:
        click.secho(f"   - {name}: {hint}", dim=True)

    click.secho("\nSupported Models", fg="blue")
    for spec in MODELS.values():
        click.secho(f"   - {spec.id}: {spec.description}", dim=True)
    click.echo()


if __name__ == "__main__":
    main()
