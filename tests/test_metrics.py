from echoprompt.metrics import STOP_WORDS, complexity_score, extract_keywords, measure
from echoprompt.models import PromptFields


def test_measure_counts_whitespace_tokens_and_characters():
    content = "You are a Poet.  Write a poem\n\nTone: Whimsical"

    result = measure(content)

    assert result.word_count == 9
    assert result.character_count == len(content)


def test_measure_is_idempotent():
    content = "  spaced   out\ttext \n"

    assert measure(content) == measure(content)
    assert measure("").word_count == 0


def test_keywords_are_capped_filtered_and_ordered():
    task = " ".join(f"word{i:02d}" for i in range(80))
    fields = PromptFields(role="Senior Data Engineer", task=task, industry="Finance", tone="Formal")

    keywords = extract_keywords(fields)

    assert len(keywords) == 20
    assert keywords[:3] == ["senior", "data", "engineer"]
    assert keywords[3] == "word00"
    assert all(len(word) > 2 for word in keywords)
    assert not STOP_WORDS.intersection(keywords)


def test_keywords_drop_stop_words_short_tokens_and_duplicates():
    fields = PromptFields(
        role="Writer",
        task="Write the best guide to the writer toolkit",
        tone="Friendly",
        output_format="Bullet Points",
    )

    assert extract_keywords(fields) == [
        "writer",
        "write",
        "best",
        "guide",
        "toolkit",
        "friendly",
        "bullet points",
    ]


def test_keywords_only_use_first_fifty_task_words():
    task = " ".join(["filler"] * 50 + ["hidden"])

    assert "hidden" not in extract_keywords(PromptFields(task=task))


def test_complexity_task_only_scores_two():
    assert complexity_score(PromptFields(task="Do X")) == 2


def test_complexity_with_all_scored_fields_is_clamped():
    fields = PromptFields(
        role="R",
        task="T",
        context="C",
        constraints="K",
        custom_variables="V",
    )

    assert complexity_score(fields) == 10


def test_complexity_length_bonuses():
    medium = PromptFields(task="x" * 501)
    long = PromptFields(task="x" * 1000, context="y" * 1)

    assert complexity_score(medium) == 4
    assert complexity_score(long) == 8


def test_complexity_is_bounded_for_empty_fields():
    assert complexity_score(PromptFields()) == 0
