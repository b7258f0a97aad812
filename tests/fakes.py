"""Test doubles."""
from codehelper.core.errors import LLMProviderError
from codehelper.services.llm import LLMProvider


class FakeLLMProvider(LLMProvider):
    """Scripted replies; set fail=True to make answers (not classification) raise."""

    name = "fake"

    def __init__(self, answer="Use a for loop.", question_type="Code Debugging", title="Python Loop Help"):
        self.answer = answer
        self.question_type = question_type
        self.title = title
        self.fail = False
        self.fail_title = False
        self.calls: list[list[dict]] = []
        self.closed = False

    async def complete(self, messages, *, max_tokens=1000, temperature=0.7):
        self.calls.append(messages)
        last = messages[-1]["content"]
        if last.startswith("Categorize this programming question"):
            return self.question_type
        if last.startswith("Create a title for this programming question"):
            if self.fail_title:
                raise LLMProviderError("title failed")
            return self.title
        if self.fail:
            raise LLMProviderError("provider down")
        return self.answer

    async def aclose(self):
        self.closed = True
