from echoprompt.compiler import OPTIMIZATION_DIRECTIVES, PROMPT_FIELD_ORDER, SECTION_LABELS, compile_prompt
from echoprompt.models import PromptFields


def test_compile_places_role_then_task_then_tone_only():
    fields = PromptFields(role="Engineer", task="Do X", tone="Formal")

    assert compile_prompt(fields) == "You are a Engineer. Do X\n\nTone: Formal"


def test_compile_task_only_is_exactly_the_task():
    fields = PromptFields.from_mapping({"task": "  Summarize the report  ", "context": "   "})

    assert compile_prompt(fields) == "Summarize the report"


def test_compile_is_deterministic():
    fields = PromptFields(
        role="Poet",
        task="Write a poem",
        context="Autumn",
        custom_variables="rhyme=ABAB",
    )

    assert compile_prompt(fields, optimize=True) == compile_prompt(fields, optimize=True)
    assert compile_prompt(fields) == compile_prompt(fields)


def test_compile_follows_field_order_for_every_section():
    values = {name: f"value-{name}" for name in PROMPT_FIELD_ORDER}
    fields = PromptFields(**values)

    result = compile_prompt(fields)

    assert result.startswith("You are a value-role. value-task")
    positions = [result.index(f"\n\n{SECTION_LABELS[name]}: value-{name}") for name in PROMPT_FIELD_ORDER[2:]]
    assert positions == sorted(positions)


def test_compile_uses_expected_labels():
    fields = PromptFields(
        task="Plan a launch",
        output_format="Table",
        response_length="Short",
        audience="Investors",
        industry="Fintech",
        mood="Optimistic",
        language="English",
        complexity="Advanced",
    )

    assert compile_prompt(fields) == (
        "Plan a launch"
        "\n\nOutput Format: Table"
        "\n\nResponse Length: Short"
        "\n\nTarget Audience: Investors"
        "\n\nIndustry Context: Fintech"
        "\n\nMood/Emotion: Optimistic"
        "\n\nLanguage: English"
        "\n\nComplexity Level: Advanced"
    )


def test_compile_with_optimize_appends_directives_last():
    fields = PromptFields(task="Explain how to bake bread", tone="Friendly")

    result = compile_prompt(fields, optimize=True)

    assert result == (
        "Explain how to bake bread\n\nTone: Friendly\n\n" + OPTIMIZATION_DIRECTIVES
    )
    assert "specific" in OPTIMIZATION_DIRECTIVES
    assert "headings" in OPTIMIZATION_DIRECTIVES
    assert "actionable steps" in OPTIMIZATION_DIRECTIVES


def test_compile_skips_empty_sections():
    fields = PromptFields(task="Do X", context="", tone=None)

    assert "Context" not in compile_prompt(fields)
    assert "Tone" not in compile_prompt(fields)
