"""System prompts per programming language and language detection from free text."""

PROGRAMMING_ONLY_RESTRICTION = """
CRITICAL: You are a programming assistant ONLY. Your role is strictly limited to:
- Programming questions and code help
- Debugging assistance
- Algorithm and data structure explanations
- Code review and best practices
- Programming language syntax and concepts
- Software development methodologies
- Technical problem-solving related to code

You MUST decline and politely redirect any requests that are NOT related to programming, such as
general conversation, essay writing, non-programming homework, personal advice, other academic
subjects, translation (unless translating code comments) or creative writing.

If a user asks something unrelated to programming, respond with:
"I'm designed to help with programming questions only. Please ask me about code, algorithms,
debugging, or programming concepts. How can I assist you with your programming task?"
""".strip()

LANGUAGE_PROMPTS = {
    "javascript": (
        "You are an expert JavaScript developer. Provide clear, modern JavaScript solutions using ES6+ "
        "features: async/await and Promises, modern array methods, destructuring and spread, arrow "
        "functions and template literals, try/catch error handling. Always provide well-commented code "
        "examples and explain your reasoning."
    ),
    "python": (
        "You are an expert Python developer. Provide clean, Pythonic solutions following PEP 8: "
        "comprehensions and generators, context managers and decorators, type hints where they help, "
        "try/except error handling and readable code. Always provide well-documented code with docstrings."
    ),
    "java": (
        "You are an expert Java developer. Provide object-oriented solutions following Java best practices: "
        "SOLID principles, design patterns when appropriate, exception handling, the collections framework "
        "and Java 8+ features (Streams, Lambdas, Optional). Use proper Java conventions."
    ),
    "typescript": (
        "You are an expert TypeScript developer. Provide type-safe solutions: interfaces, generics and "
        "utility types, type guards, optional chaining and nullish coalescing. Avoid 'any' and always "
        "provide fully typed examples."
    ),
    "cpp": (
        "You are an expert C++ developer. Provide efficient, modern C++ (C++11 to C++20) solutions: smart "
        "pointers and RAII, STL containers and algorithms, templates. Provide well-commented code."
    ),
    "rust": (
        "You are an expert Rust developer. Provide safe, idiomatic Rust: ownership and borrowing, pattern "
        "matching with Result and Option, traits and generics, async/await. Handle errors properly."
    ),
    "go": (
        "You are an expert Go developer. Provide clean, idiomatic Go: goroutines and channels, explicit "
        "error handling, interfaces and composition, simple package organization."
    ),
    "general": (
        "You are a helpful programming assistant. Provide clear, concise, and accurate answers to "
        "programming questions. When providing code examples, make sure they are well-formatted and "
        "include comments where appropriate."
    ),
}

LANGUAGE_DISPLAY = {
    "javascript": "JavaScript",
    "python": "Python",
    "java": "Java",
    "typescript": "TypeScript",
    "cpp": "C++",
    "rust": "Rust",
    "go": "Go",
    "general": "General Programming",
}

# checked first; more specific than bare language keywords
FRAMEWORK_LANGUAGES = {
    "react": "javascript",
    "vue": "javascript",
    "angular": "typescript",
    "next.js": "typescript",
    "nextjs": "typescript",
    "django": "python",
    "flask": "python",
    "fastapi": "python",
    "spring": "java",
    "express": "javascript",
    "nestjs": "typescript",
}

LANGUAGE_KEYWORDS = {
    "javascript": ["javascript", "js", "node", "npm", "promise", "es6", "arrow function", "jsx", "dom"],
    "python": ["python", "py", "pip", "def ", "list comprehension", "pandas", "numpy", "pytest", "virtualenv"],
    "java": ["java", "maven", "gradle", "public class", "jvm", "jdk", "arraylist", "hashmap"],
    "typescript": ["typescript", "ts", "tsx", "type annotation", "type guard"],
    "cpp": ["c++", "cpp", "#include", "std::", "iostream", "stl"],
    "rust": ["rust", "cargo", "&str", "ownership", "borrow checker", "unwrap"],
    "go": ["golang", "goroutine", "go func", "defer "],
}

CONVERSATION_NOTE = (
    "Note: This is part of an ongoing conversation. Use the previous messages as context to provide "
    "relevant and coherent responses. Maintain consistency with the programming language and concepts "
    "discussed earlier."
)


def _contains_keyword(text: str, keyword: str) -> bool:
    # short alphabetic keywords ("js", "py", "ts") must stand alone
    if len(keyword) <= 3 and keyword.isalpha():
        words = "".join(c if c.isalnum() else " " for c in text).split()
        return keyword in words
    return keyword in text


def detect_language(message: str) -> str:
    """Return a LANGUAGE_PROMPTS key for message; "general" when nothing matches."""
    text = message.lower()
    for framework, language in FRAMEWORK_LANGUAGES.items():
        if _contains_keyword(text, framework):
            return language
    for language, keywords in LANGUAGE_KEYWORDS.items():
        if any(_contains_keyword(text, k) for k in keywords):
            return language
    return "general"


def get_system_prompt(message: str, history: list[dict] | None = None) -> str:
    """Build the system prompt; history is [{role, content}] oldest first."""
    language = detect_language(message)
    if language == "general" and history:
        user_text = " ".join(m["content"] for m in history if m["role"] == "user")
        language = detect_language(user_text)

    prompt = f"{PROGRAMMING_ONLY_RESTRICTION}\n\n{LANGUAGE_PROMPTS[language]}"
    if history:
        prompt = f"{prompt}\n\n{CONVERSATION_NOTE}"
    return prompt
