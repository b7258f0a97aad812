"""Keyword pre-filter that keeps the chat on programming topics.

Matching is plain substring search on the lowercased message, so short
keywords such as ``js`` or ``db`` also match inside longer words.
"""
import random
import re
from typing import Callable, Sequence

PROGRAMMING_KEYWORDS = (
    # general
    "code", "programming", "program", "coding", "developer", "development",
    "function", "variable", "constant", "array", "list", "dictionary", "object",
    "class", "method", "property", "attribute", "parameter", "argument",
    "loop", "for", "while", "if", "else", "switch", "case", "break", "continue",
    "return", "void", "null", "undefined", "true", "false", "boolean",
    "string", "number", "integer", "float", "double", "char", "byte",
    # concepts
    "algorithm", "data structure", "stack", "queue", "tree",
    "graph", "hash", "map", "set", "linked list", "binary search", "sort",
    "recursion", "iteration", "optimization", "complexity", "big o",
    # code operations
    "syntax", "error", "bug", "debug", "debugging", "exception", "try", "catch",
    "throw", "compile", "compilation", "runtime", "compile time", "execute",
    "run", "test", "testing", "unit test", "integration test", "test case",
    "refactor", "refactoring", "optimize", "performance", "memory", "cpu",
    # languages and frameworks
    "javascript", "js", "typescript", "ts", "python", "py", "java", "cpp", "c++",
    "c#", "csharp", "rust", "go", "golang", "php", "ruby", "swift", "kotlin",
    "react", "vue", "angular", "node", "express", "django", "flask", "spring",
    "next.js", "nextjs", "nestjs", "laravel", "rails",
    # web
    "html", "css", "dom", "api", "rest", "graphql", "http", "https", "endpoint",
    "request", "response", "json", "xml", "fetch", "axios", "async", "await",
    "promise", "callback", "event", "listener", "handler",
    # databases
    "database", "db", "sql", "mysql", "postgresql", "mongodb", "redis",
    "query", "table", "row", "column", "index", "foreign key", "primary key",
    "join", "select", "insert", "update", "delete", "transaction",
    # version control
    "git", "github", "gitlab", "commit", "branch", "merge", "pull request",
    "repository", "repo", "clone", "push", "pull",
    # tooling
    "npm", "yarn", "package", "module", "import", "export", "require",
    "dependency", "library", "framework", "sdk", "ide", "editor",
    # patterns
    "pattern", "design pattern", "singleton", "factory", "observer", "mvc",
    "mvp", "mvvm", "oop", "object oriented", "functional", "procedural",
    "imperative", "declarative",
    # operations
    "parse", "stringify", "encode", "decode", "serialize", "deserialize",
    "iterate", "filter", "reduce", "find", "search",
    "reverse", "split", "concat", "substring", "slice", "splice",
    # common issues
    "fix", "issue", "problem", "solution", "workaround", "patch", "hotfix",
    "crash", "freeze", "hang", "timeout", "deadlock", "race condition",
    "memory leak", "stack overflow", "null pointer", "undefined reference",
    # learning
    "learn", "tutorial", "example", "sample", "documentation", "docs",
    "guide", "how to", "explain", "understand", "concept", "principle",
    "best practice", "convention", "standard", "style guide",
    "coding challenge", "challenge",
    # Russian
    "совет", "рекомендац", "рекомендовать", "рекомендуй",
    "улучшить", "улучшение", "навык", "скилл",
    "помощь", "помоги", "помочь", "подскажи", "подсказк",
    "вопрос", "задач", "решени",
    "что еще", "какие еще", "еще", "дополнительн",
)

NON_PROGRAMMING_KEYWORDS = (
    # academic
    "essay", "thesis", "dissertation", "paper", "research paper",
    "history", "philosophy", "literature", "poetry", "novel", "story",
    "mathematics", "physics", "chemistry", "biology", "geography",
    # small talk
    "weather", "recipe", "cooking", "travel", "vacation", "holiday",
    "movie", "film", "music", "song", "book", "game", "sport",
    "relationship", "dating", "marriage", "family", "friend",
    # personal advice
    "advice", "help me with", "what should i do", "personal problem",
    "emotional", "feeling", "depressed", "anxious", "stress",
    # other
    "translate", "translation", "language learning", "grammar",
    "writing", "creative writing", "fiction", "non-fiction",
)

CONTINUATION_KEYWORDS = (
    "what else", "what more", "more", "another", "other", "additional",
    "еще", "дополнительно", "другие",
    "совет", "рекомендац", "рекомендовать", "рекомендуй",
    "tips", "tip", "advice", "suggest", "recommend",
    "помоги", "помощь", "подскажи", "подсказк",
)

CODE_PATTERNS = (
    re.compile(r"[a-z_][a-z0-9_]*\s*\("),  # call
    re.compile(r"[a-z_][a-z0-9_]*\s*="),  # assignment
    re.compile(r"[{}\[\]]"),
    re.compile(r"[<>]"),
    re.compile(r"//|/\*|\*/|#"),
    re.compile(r"\.(js|ts|py|java|cpp|cs|rs|go|php|rb|swift|kt)$"),
)

REJECTION_MESSAGES = (
    "I'm designed to help with programming questions only. Please ask me about code, "
    "algorithms, debugging, or programming concepts. How can I assist you with your programming task?",
    "I specialize in programming assistance. Could you rephrase your question to focus on "
    "coding, software development, or programming concepts?",
    "I can only help with programming-related questions. Feel free to ask about code, "
    "debugging, algorithms, data structures, or any programming language!",
)

MIN_MESSAGE_LENGTH = 3


def _mentions(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _history_is_programming(history: Sequence[dict] | None) -> bool:
    if not history:
        return False
    text = " ".join(turn["content"] for turn in history).lower()
    return _mentions(text, PROGRAMMING_KEYWORDS)


def is_programming_related(message: str, history: Sequence[dict] | None = None) -> bool:
    """Whether the message (read together with the conversation so far) is on topic.

    Order of checks:

    1. Fewer than three characters: off topic.
    2. An off-topic keyword with no programming keyword is accepted only
       when the earlier turns were about programming.
    3. A programming keyword or a code-like fragment: on topic.
    4. Otherwise a follow-up such as "what else?" is accepted when the
       earlier turns were about programming.
    """
    text = message.strip().lower()
    if len(text) < MIN_MESSAGE_LENGTH:
        return False

    has_keyword = _mentions(text, PROGRAMMING_KEYWORDS)
    if _mentions(text, NON_PROGRAMMING_KEYWORDS) and not has_keyword:
        return _history_is_programming(history)

    if has_keyword or any(p.search(text) for p in CODE_PATTERNS):
        return True

    return _mentions(text, CONTINUATION_KEYWORDS) and _history_is_programming(history)


def get_rejection_message(choice: Callable[[Sequence[str]], str] = random.choice) -> str:
    """One of the polite refusals, picked at random."""
    return choice(REJECTION_MESSAGES)
