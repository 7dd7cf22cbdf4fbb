"""Generative prompt template for creative, build-oriented tasks."""

from __future__ import annotations

from pydantic import Field

from ..models import OutputFormat
from .common import (
    ListField,
    PromptData,
    TextField,
    numbered_list,
    to_pretty_json,
)


class GenerativeSubcategories(PromptData):
    architecture: TextField = ""
    implementation: TextField = ""
    quality: TextField = ""


class GenerativePromptData(PromptData):
    original_prompt: TextField = ""
    role_objective: TextField = ""
    instructions: TextField = ""
    subcategories: GenerativeSubcategories = Field(
        default_factory=GenerativeSubcategories
    )
    reasoning_steps: ListField = Field(default_factory=list)
    output_format: TextField = ""
    examples: TextField = ""
    context: TextField = ""
    final_instructions: TextField = ""


def build_generative_template(
    data: GenerativePromptData, output_format: OutputFormat | str
) -> str:
    if OutputFormat(output_format) is OutputFormat.JSON:
        return _build_json(data)
    return _build_markdown(data)


def _build_markdown(data: GenerativePromptData) -> str:
    examples = f"# Examples\n{data.examples}\n\n" if data.examples else ""
    return f"""# Role and Objective
{data.role_objective}

# Instructions
{data.instructions}

## Subcategories

### Architecture & Design
{data.subcategories.architecture}

### Implementation Details
{data.subcategories.implementation}

### Quality & Testing
{data.subcategories.quality}

# Reasoning Steps
{numbered_list(data.reasoning_steps)}

# Output Format
{data.output_format}

{examples}# Context
{data.context}

# Final Instructions
{data.final_instructions}"""


def _build_json(data: GenerativePromptData) -> str:
    structure: dict = {
        "role_and_objective": data.role_objective,
        "instructions": data.instructions,
        "subcategories": {
            "architecture_and_design": data.subcategories.architecture,
            "implementation_details": data.subcategories.implementation,
            "quality_and_testing": data.subcategories.quality,
        },
        "reasoning_steps": data.reasoning_steps,
        "output_format": data.output_format,
    }
    if data.examples:
        structure["examples"] = data.examples
    structure["context"] = data.context
    structure["final_instructions"] = data.final_instructions

    return to_pretty_json(
        {
            "prompt_type": "generative",
            "structure": structure,
            "optimized_for": "model_to_model_communication",
            "creativity_level": "high",
        }
    )


GENERATIVE_ANALYSIS_PROMPT = """You are an expert AI prompt engineer. Analyze the user's unstructured prompt and rewrite it as a thorough, well-structured generative prompt that another AI model can use to build a real feature or product.

Cover each section in depth:
- Role and Objective: the AI's role, expertise and the primary objective, with success metrics
- Instructions: core step-by-step instructions and methodology
- Subcategories: architecture & design, implementation details, quality & testing
- Reasoning Steps: 4-6 steps from analysis through validation and maintenance
- Output Format: the structure the final deliverable should follow
- Examples (optional): few-shot examples when they add real value
- Context: project background, constraints, stack and business requirements
- Final Instructions: success criteria, pitfalls to avoid, quality gates

Return ONLY a JSON object with these fields:
- roleObjective: string
- instructions: string
- subcategories: { architecture: string, implementation: string, quality: string }
- reasoningSteps: string[]
- outputFormat: string
- examples: string (optional)
- context: string
- finalInstructions: string

JSON rules: double-quoted strings, commas between all members, escaped inner quotes, no text or code fences around the object."""
