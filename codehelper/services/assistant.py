"""Programming-assistant calls on top of an LLM provider: reply, classify, title."""
import logging

from codehelper.core.errors import LLMProviderError
from codehelper.services.llm import LLMProvider
from codehelper.services.prompts import get_system_prompt

logger = logging.getLogger(__name__)

QUESTION_TYPES = [
    "Code Debugging",
    "Algorithm Help",
    "Syntax Questions",
    "Framework Help",
    "Database Queries",
    "API Integration",
    "General Programming",
    "Code Review",
]
DEFAULT_QUESTION_TYPE = "General Programming"
FALLBACK_RESPONSE = "Sorry, I couldn't generate a response."

CLASSIFY_PROMPT = (
    "You are a helpful assistant that categorizes programming questions. Based on the user's question, "
    "determine the most appropriate category from these options: "
    + ", ".join(f"'{t}'" for t in QUESTION_TYPES)
    + ". Return only the category name, nothing else."
)

TITLE_PROMPT = (
    "You are a helpful assistant that creates concise, descriptive titles for programming chat "
    "conversations. Based on the user's question, generate a short, clear title (max 6 words) that "
    "captures the main topic or programming concept being discussed. Examples: 'React Hooks Help', "
    "'Python Debugging', 'Database Design', 'API Integration', 'CSS Styling Issues'. Return only the "
    "title, nothing else."
)
TITLE_MAX_WORDS = 6
TITLE_MAX_CHARS = 50


async def generate_response(
    provider: LLMProvider,
    message: str,
    history: list[dict] | None = None,
    *,
    max_tokens: int = 1000,
    temperature: float = 0.7,
) -> str:
    """Answer message given prior turns (oldest first).

    Raises LLMProviderError when the provider fails; there is no retry.
    """
    history = history or []
    messages = [{"role": "system", "content": get_system_prompt(message, history)}]
    messages.extend({"role": m["role"], "content": m["content"]} for m in history)
    messages.append({"role": "user", "content": message})

    try:
        text = await provider.complete(messages, max_tokens=max_tokens, temperature=temperature)
    except LLMProviderError:
        raise
    except Exception as e:
        raise LLMProviderError("Failed to generate response") from e
    return text.strip() or FALLBACK_RESPONSE


def normalize_question_type(raw: str | None) -> str:
    """Map provider output onto QUESTION_TYPES; anything else is DEFAULT_QUESTION_TYPE."""
    if not raw:
        return DEFAULT_QUESTION_TYPE
    cleaned = raw.strip().strip("'\".").lower()
    for t in QUESTION_TYPES:
        if cleaned == t.lower():
            return t
    for t in QUESTION_TYPES:
        if t.lower() in cleaned:
            return t
    return DEFAULT_QUESTION_TYPE


async def analyze_question_type(provider: LLMProvider, message: str) -> str:
    """Classify message into one of QUESTION_TYPES (best-effort)."""
    messages = [
        {"role": "system", "content": CLASSIFY_PROMPT},
        {"role": "user", "content": f'Categorize this programming question: "{message}"'},
    ]
    try:
        raw = await provider.complete(messages, max_tokens=20, temperature=0.3)
    except Exception:
        logger.warning("Question classification failed; using %s", DEFAULT_QUESTION_TYPE, exc_info=True)
        return DEFAULT_QUESTION_TYPE
    return normalize_question_type(raw)


def fallback_title(message: str) -> str:
    message = " ".join(message.split())
    if len(message) > TITLE_MAX_CHARS:
        return message[:TITLE_MAX_CHARS] + "..."
    return message


def clean_title(raw: str | None, message: str) -> str:
    title = (raw or "").replace('"', "").replace("'", "").strip()
    words = title.split()
    if len(words) > TITLE_MAX_WORDS:
        title = " ".join(words[:TITLE_MAX_WORDS])
    if len(title) < 3 or len(title) > TITLE_MAX_CHARS:
        return fallback_title(message)
    return title


async def generate_chat_title(provider: LLMProvider, message: str) -> str:
    """Short session title for message. Raises when the provider fails."""
    messages = [
        {"role": "system", "content": TITLE_PROMPT},
        {"role": "user", "content": f'Create a title for this programming question: "{message}"'},
    ]
    raw = await provider.complete(messages, max_tokens=20, temperature=0.3)
    return clean_title(raw, message)
