import pytest

from codehelper.core.errors import LLMProviderError
from codehelper.services.assistant import (
    DEFAULT_QUESTION_TYPE,
    FALLBACK_RESPONSE,
    analyze_question_type,
    clean_title,
    fallback_title,
    generate_response,
    normalize_question_type,
)
from codehelper.services.llm import MockLLMProvider, create_llm_provider
from codehelper.services.prompts import (
    CONVERSATION_NOTE,
    LANGUAGE_PROMPTS,
    PROGRAMMING_ONLY_RESTRICTION,
    detect_language,
    get_system_prompt,
)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("How do I use useEffect in React?", "javascript"),
        ("Django model field for emails", "python"),
        ("Why does my python list comprehension fail?", "python"),
        ("What does std::move do?", "cpp"),
        ("Explain the borrow checker", "rust"),
        ("How do goroutines communicate?", "go"),
        ("What is a linked list?", "general"),
        ("Is this typescript type guard right?", "typescript"),
    ],
)
def test_detect_language(message, expected):
    assert detect_language(message) == expected


def test_short_keywords_need_whole_words():
    # "js" inside another word is not javascript
    assert detect_language("adjust the margins of my loop") == "general"


def test_system_prompt_falls_back_to_history():
    history = [
        {"role": "user", "content": "I am writing Rust with cargo"},
        {"role": "assistant", "content": "Sure"},
    ]
    prompt = get_system_prompt("and how do I test it?", history)
    assert prompt.startswith(PROGRAMMING_ONLY_RESTRICTION)
    assert LANGUAGE_PROMPTS["rust"] in prompt
    assert prompt.endswith(CONVERSATION_NOTE)


def test_system_prompt_without_history_has_no_conversation_note():
    prompt = get_system_prompt("What is recursion?")
    assert LANGUAGE_PROMPTS["general"] in prompt
    assert CONVERSATION_NOTE not in prompt


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Code Debugging", "Code Debugging"),
        ("'algorithm help'.", "Algorithm Help"),
        ("Category: Database Queries", "Database Queries"),
        ("Cooking", DEFAULT_QUESTION_TYPE),
        ("", DEFAULT_QUESTION_TYPE),
        (None, DEFAULT_QUESTION_TYPE),
    ],
)
def test_normalize_question_type(raw, expected):
    assert normalize_question_type(raw) == expected


def test_clean_title():
    assert clean_title('"React Hooks Help"', "q") == "React Hooks Help"
    assert clean_title("one two three four five six seven eight", "q") == "one two three four five six"
    message = "x" * 80
    assert clean_title("ab", message) == "x" * 50 + "..."
    assert fallback_title("short question") == "short question"


class BrokenProvider(MockLLMProvider):
    async def complete(self, messages, *, max_tokens=1000, temperature=0.7):
        raise RuntimeError("boom")


class EmptyProvider(MockLLMProvider):
    async def complete(self, messages, *, max_tokens=1000, temperature=0.7):
        return "   "


@pytest.mark.anyio
async def test_generate_response_wraps_provider_failures():
    with pytest.raises(LLMProviderError):
        await generate_response(BrokenProvider(), "hello", [])


@pytest.mark.anyio
async def test_empty_completion_uses_fallback_text():
    assert await generate_response(EmptyProvider(), "hello", []) == FALLBACK_RESPONSE


@pytest.mark.anyio
async def test_classification_failure_uses_default():
    assert await analyze_question_type(BrokenProvider(), "hello") == DEFAULT_QUESTION_TYPE


@pytest.mark.anyio
async def test_generate_response_sends_history_in_order():
    seen = []

    class Recorder(MockLLMProvider):
        async def complete(self, messages, *, max_tokens=1000, temperature=0.7):
            seen.extend(messages)
            return "ok"

    history = [{"role": "user", "content": "first"}, {"role": "assistant", "content": "reply"}]
    await generate_response(Recorder(), "second", history)
    assert [m["role"] for m in seen] == ["system", "user", "assistant", "user"]
    assert seen[-1]["content"] == "second"


def test_openai_without_key_falls_back_to_mock(settings):
    settings.llm_provider = "openai"
    settings.openai_api_key = None
    assert isinstance(create_llm_provider(settings), MockLLMProvider)


def test_unknown_provider_is_rejected(settings):
    settings.llm_provider = "nope"
    with pytest.raises(ValueError):
        create_llm_provider(settings)
