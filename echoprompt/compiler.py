"""Local prompt compilation from structured fields."""

from typing import Dict, Tuple

from .models import PromptFields

PROMPT_FIELD_ORDER: Tuple[str, ...] = (
    "role",
    "task",
    "context",
    "tone",
    "output_format",
    "constraints",
    "response_length",
    "audience",
    "industry",
    "mood",
    "language",
    "complexity",
    "custom_variables",
)

# role and task are rendered inline, everything else as a labelled section.
SECTION_LABELS: Dict[str, str] = {
    "context": "Context",
    "tone": "Tone",
    "output_format": "Output Format",
    "constraints": "Constraints",
    "response_length": "Response Length",
    "audience": "Target Audience",
    "industry": "Industry Context",
    "mood": "Mood/Emotion",
    "language": "Language",
    "complexity": "Complexity Level",
    "custom_variables": "Custom Variables",
}

OPTIMIZATION_DIRECTIVES = (
    "--- LOCAL OPTIMIZATION ---\n"
    "Please be specific and provide detailed examples where appropriate.\n"
    "Structure your response clearly with appropriate headings or sections.\n"
    "Provide actionable steps that can be implemented immediately."
)


def compile_prompt(fields: PromptFields, optimize: bool = False) -> str:
    """
    Compile prompt text from fields in the fixed section order.

    The role becomes an inline "You are a ..." prefix to the task; every other
    present field is appended as "Label: value" after a blank line. With
    ``optimize`` the generic directives block is appended last.
    """
    prompt = ""
    for name in PROMPT_FIELD_ORDER:
        value = fields.get(name)
        if not value:
            continue
        if name == "role":
            prompt += f"You are a {value}. "
        elif name == "task":
            prompt += value
        else:
            prompt += f"\n\n{SECTION_LABELS[name]}: {value}"

    prompt = prompt.strip()
    if optimize:
        prompt += f"\n\n{OPTIMIZATION_DIRECTIVES}"
    return prompt
