import pytest

from aimi.infrastructure.llm.router.model_selector import (
    LONG_FORM_MODELS,
    MessageCategory,
    detect_message_category,
    get_narrative_instruction,
    get_recommended_max_tokens,
    get_recommended_temperature,
    get_word_count,
    select_model_config,
    select_model_for_message,
)


def words(n):
    return " ".join(["chữ"] * n)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("", MessageCategory.SHORT),
        (words(99), MessageCategory.SHORT),
        (words(100), MessageCategory.LONG),
        (words(250), MessageCategory.LONG),
    ],
)
def test_detect_message_category(message, expected):
    assert detect_message_category(message) is expected


def test_word_count_collapses_whitespace():
    assert get_word_count("  anh   yêu\n\nem \t nhiều ") == 4
    assert get_word_count("   ") == 0


@pytest.mark.parametrize("category", [MessageCategory.SHORT, MessageCategory.LONG])
def test_model_tables_sorted_by_priority(category):
    models = select_model_config(category)
    assert [m.priority for m in models] == sorted(m.priority for m in models)
    assert all(m.is_free for m in models)


def test_select_model_config_returns_a_copy():
    models = select_model_config(MessageCategory.LONG)
    models.clear()
    assert len(select_model_config(MessageCategory.LONG)) == len(LONG_FORM_MODELS)


def test_select_model_for_message():
    selection = select_model_for_message(words(120))
    assert selection.category is MessageCategory.LONG
    assert selection.word_count == 120
    assert selection.models[0].model_name == "Qwen/Qwen2.5-32B-Instruct"


def test_forced_category_overrides_length():
    selection = select_model_for_message("hi", force_category=MessageCategory.LONG)
    assert selection.category is MessageCategory.LONG
    assert selection.word_count == 1


def test_narrative_instruction_languages():
    assert "CASUAL CHAT MODE" in get_narrative_instruction(MessageCategory.SHORT, "en")
    assert "LONG-FORM NARRATIVE MODE" in get_narrative_instruction(MessageCategory.LONG, "en")
    assert "CHẾ ĐỘ CHAT THƯỜNG" in get_narrative_instruction(MessageCategory.SHORT, "vi")
    assert "CHẾ ĐỘ TRUYỆN DÀI" in get_narrative_instruction(MessageCategory.LONG, "fr")


def test_recommended_generation_params():
    assert get_recommended_max_tokens(MessageCategory.LONG) == 4000
    assert get_recommended_max_tokens(MessageCategory.SHORT) == 800
    assert get_recommended_temperature(MessageCategory.LONG) == 0.8
    assert get_recommended_temperature("short") == 0.7
