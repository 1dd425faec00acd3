"""Input checks run before any generation work."""

from typing import List

from .models import PromptFields, ValidationResult

MAX_TASK_LENGTH = 1000
MAX_CONTEXT_LENGTH = 2000
MAX_CONSTRAINTS_LENGTH = 500
MAX_CUSTOM_VARIABLES_LENGTH = 1000


class PromptValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("Invalid prompt data: " + "; ".join(errors))
        self.errors = list(errors)


def validate_prompt_fields(fields: PromptFields) -> ValidationResult:
    """Collect every rule violation; no rule short-circuits another."""
    errors: List[str] = []

    if not fields.task or not fields.task.strip():
        errors.append("Task is required")

    if fields.task and len(fields.task) > MAX_TASK_LENGTH:
        errors.append(f"Task description is too long (max {MAX_TASK_LENGTH} characters)")

    if fields.context and len(fields.context) > MAX_CONTEXT_LENGTH:
        errors.append(f"Context is too long (max {MAX_CONTEXT_LENGTH} characters)")

    if fields.constraints and len(fields.constraints) > MAX_CONSTRAINTS_LENGTH:
        errors.append(f"Constraints are too long (max {MAX_CONSTRAINTS_LENGTH} characters)")

    if fields.custom_variables and len(fields.custom_variables) > MAX_CUSTOM_VARIABLES_LENGTH:
        errors.append(
            f"Custom variables are too long (max {MAX_CUSTOM_VARIABLES_LENGTH} characters)"
        )

    return ValidationResult(is_valid=not errors, errors=errors)


def ensure_valid(fields: PromptFields) -> None:
    result = validate_prompt_fields(fields)
    if not result.is_valid:
        raise PromptValidationError(result.errors)
