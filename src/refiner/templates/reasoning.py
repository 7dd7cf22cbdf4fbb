"""Reasoning prompt templates in detailed and compact flavors."""

from __future__ import annotations

from pydantic import Field

from ..models import OutputFormat, PromptFlavor
from .common import (
    ListField,
    PromptData,
    TextField,
    bullet_list,
    to_pretty_json,
)


class OrderedInstructions(PromptData):
    priority1: ListField = Field(default_factory=list)
    priority2: ListField = Field(default_factory=list)
    priority3: ListField = Field(default_factory=list)


class Rankings(PromptData):
    security: TextField = ""
    performance: TextField = ""
    user_experience: TextField = ""
    maintainability: TextField = ""


class ReasoningDetailedPromptData(PromptData):
    original_prompt: TextField = ""
    goal: TextField = ""
    response_format: TextField = ""
    warnings: ListField = Field(default_factory=list)
    context: TextField = ""
    analysis_content: TextField = ""
    requirements_content: TextField = ""
    output_content: TextField = ""
    ordered_instructions: OrderedInstructions = Field(
        default_factory=OrderedInstructions
    )
    rankings: Rankings = Field(default_factory=Rankings)


class ReasoningFramework(PromptData):
    describe: TextField = ""
    isolate: TextField = ""
    sequence: TextField = ""
    test: TextField = ""


class ReasoningCompactPromptData(PromptData):
    original_prompt: TextField = ""
    problem_statement: TextField = ""
    known_information: TextField = ""
    hard_constraints: ListField = Field(default_factory=list)
    key_assumptions: ListField = Field(default_factory=list)
    reasoning_framework: ReasoningFramework = Field(
        default_factory=ReasoningFramework
    )
    output_format: TextField = ""


def build_reasoning_template(
    data: ReasoningDetailedPromptData | ReasoningCompactPromptData,
    output_format: OutputFormat | str,
    flavor: PromptFlavor | str = PromptFlavor.DETAILED,
) -> str:
    as_json = OutputFormat(output_format) is OutputFormat.JSON
    if PromptFlavor(flavor) is PromptFlavor.COMPACT:
        if not isinstance(data, ReasoningCompactPromptData):
            raise TypeError("compact flavor needs ReasoningCompactPromptData")
        return _build_compact_json(data) if as_json else _build_compact_markdown(data)

    if not isinstance(data, ReasoningDetailedPromptData):
        raise TypeError("detailed flavor needs ReasoningDetailedPromptData")
    return _build_detailed_json(data) if as_json else _build_detailed_markdown(data)


def _build_detailed_markdown(data: ReasoningDetailedPromptData) -> str:
    steps = data.ordered_instructions
    return f"""# Goal
{data.goal}

# Response Format
{data.response_format}

# Warnings
{bullet_list(data.warnings)}

# Context
{data.context}

# Separators

<analysis>
{data.analysis_content}
</analysis>

<requirements>
{data.requirements_content}
</requirements>

<output>
{data.output_content}
</output>

# Ordered Instructions

## Priority 1: Critical Requirements (Must Have)
{bullet_list(steps.priority1)}

## Priority 2: Important Features (Should Have)
{bullet_list(steps.priority2)}

## Priority 3: Nice-to-Have Enhancements (Could Have)
{bullet_list(steps.priority3)}

# Rankings/Priorities
- **Security**: {data.rankings.security}
- **Performance**: {data.rankings.performance}
- **User Experience**: {data.rankings.user_experience}
- **Maintainability**: {data.rankings.maintainability}"""


def _build_detailed_json(data: ReasoningDetailedPromptData) -> str:
    return to_pretty_json(
        {
            "prompt_type": "reasoning",
            "structure": {
                "goal": data.goal,
                "response_format": data.response_format,
                "warnings": data.warnings,
                "context": data.context,
                "separators": {
                    "analysis": data.analysis_content,
                    "requirements": data.requirements_content,
                    "output": data.output_content,
                },
                "ordered_instructions": {
                    "priority_1_critical": data.ordered_instructions.priority1,
                    "priority_2_important": data.ordered_instructions.priority2,
                    "priority_3_nice_to_have": data.ordered_instructions.priority3,
                },
                "rankings": {
                    "security": data.rankings.security,
                    "performance": data.rankings.performance,
                    "user_experience": data.rankings.user_experience,
                    "maintainability": data.rankings.maintainability,
                },
            },
            "optimized_for": "model_to_model_communication",
            "reasoning_style": "structured_no_cot",
        }
    )


def _build_compact_markdown(data: ReasoningCompactPromptData) -> str:
    framework = data.reasoning_framework
    assumptions = (
        f"\n\n## Key Assumptions\n{bullet_list(data.key_assumptions)}"
        if data.key_assumptions
        else ""
    )
    return f"""# Problem Statement
{data.problem_statement}

# Known Information & Constraints
## Data / Code Under Analysis
{data.known_information}

## Hard Constraints
{bullet_list(data.hard_constraints)}{assumptions}

# Chain of Thought / Reasoning Framework (DESCRIBE → ISOLATE → SEQUENCE → TEST)
1. DESCRIBE: {framework.describe}
2. ISOLATE: {framework.isolate}
3. SEQUENCE: {framework.sequence}
4. TEST: {framework.test}

# Required Output Format
{data.output_format}"""


def _build_compact_json(data: ReasoningCompactPromptData) -> str:
    structure: dict = {
        "problem_statement": data.problem_statement,
        "known_information": data.known_information,
        "hard_constraints": data.hard_constraints,
    }
    if data.key_assumptions:
        structure["key_assumptions"] = data.key_assumptions
    structure["reasoning_framework"] = {
        "describe": data.reasoning_framework.describe,
        "isolate": data.reasoning_framework.isolate,
        "sequence": data.reasoning_framework.sequence,
        "test": data.reasoning_framework.test,
    }
    structure["output_format"] = data.output_format

    return to_pretty_json(
        {
            "prompt_type": "reasoning_compact",
            "structure": structure,
            "optimized_for": "model_to_model_communication",
            "reasoning_style": "compact_structured",
        }
    )


_JSON_RULES = """JSON rules:
1. Return ONLY the JSON object, no text before or after and no code fences
2. Use double quotes for all keys and strings
3. Put a comma between every pair of members
4. Escape quotes inside string values with a backslash"""

REASONING_DETAILED_ANALYSIS_PROMPT = f"""You are an expert AI prompt engineer. Analyze the user's unstructured prompt and rewrite it as a thorough, well-structured reasoning prompt for AI model-to-model communication when building features and products.

Cover each section in depth:
- Goal: what is being built, objectives, target users and success criteria
- Response Format: the structured requirements format downstream models should produce
- Warnings: constraints, security concerns, anti-patterns, edge cases and compliance issues
- Context: current system state, dependencies, stack, timeline and business requirements
- Separators: analysis (problem breakdown and approach), requirements (prioritized, with acceptance criteria), output (final deliverable and quality gates)
- Ordered Instructions: priority 1 (must have), priority 2 (should have), priority 3 (could have)
- Rankings: security, performance, user experience and maintainability, each with a short rationale

Return ONLY a JSON object with these fields:
- goal: string
- responseFormat: string
- warnings: string[]
- context: string
- analysisContent: string
- requirementsContent: string
- outputContent: string
- orderedInstructions: {{ priority1: string[], priority2: string[], priority3: string[] }}
- rankings: {{ security: string, performance: string, userExperience: string, maintainability: string }}

{_JSON_RULES}"""

REASONING_COMPACT_ANALYSIS_PROMPT = f"""You are an expert AI prompt engineer. Analyze the user's unstructured prompt and rewrite it as a focused, compact reasoning prompt for structured problem solving. Keep every section short and actionable.

Sections:
- Problem Statement: the specific problem, at most 4-5 sentences
- Known Information: the relevant data, code or context
- Hard Constraints: 3-5 non-negotiable requirements
- Key Assumptions (optional): only if they matter
- Reasoning Framework: DESCRIBE (what to understand), ISOLATE (what to focus on), SEQUENCE (steps to follow), TEST (how to verify)
- Output Format: the required shape of the final answer

Return ONLY a JSON object with these fields:
- problemStatement: string
- knownInformation: string
- hardConstraints: string[]
- keyAssumptions: string[] (optional)
- reasoningFramework: {{ describe: string, isolate: string, sequence: string, test: string }}
- outputFormat: string

{_JSON_RULES}"""

REASONING_ANALYSIS_PROMPT = REASONING_DETAILED_ANALYSIS_PROMPT
