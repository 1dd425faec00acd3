import pytest

from echoprompt.models import PromptFields
from echoprompt.validation import PromptValidationError, ensure_valid, validate_prompt_fields


def test_missing_task_is_invalid():
    result = validate_prompt_fields(PromptFields.from_mapping({}))

    assert result.is_valid is False
    assert result.errors == ["Task is required"]


def test_task_length_boundary():
    at_limit = validate_prompt_fields(PromptFields(task="x" * 1000))
    over_limit = validate_prompt_fields(PromptFields(task="x" * 1001))

    assert at_limit.is_valid is True
    assert at_limit.errors == []
    assert over_limit.is_valid is False
    assert any("Task" in error for error in over_limit.errors)


def test_all_errors_are_collected():
    fields = PromptFields(
        task="x" * 1001,
        context="c" * 2001,
        constraints="k" * 501,
        custom_variables="v" * 1001,
    )

    result = validate_prompt_fields(fields)

    assert result.is_valid is False
    assert result.errors == [
        "Task description is too long (max 1000 characters)",
        "Context is too long (max 2000 characters)",
        "Constraints are too long (max 500 characters)",
        "Custom variables are too long (max 1000 characters)",
    ]


def test_length_limits_are_inclusive():
    fields = PromptFields(
        task="Do X",
        context="c" * 2000,
        constraints="k" * 500,
        custom_variables="v" * 1000,
    )

    assert validate_prompt_fields(fields).is_valid is True


def test_ensure_valid_raises_with_errors():
    with pytest.raises(PromptValidationError) as exc_info:
        ensure_valid(PromptFields(task="   "))

    assert exc_info.value.errors == ["Task is required"]
