from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from context_tailor.domain.errors import InvalidRangeError
from context_tailor.domain.models import Message


@runtime_checkable
class TokenCounter(Protocol):
    """
    Считает токены.
    Контракт: детерминированно, неотрицательно, монотонно по длине текста.
    count_tokens_range по умолчанию просто суммирует count_tokens по [start, end).
    """

    def count_text(self, text: str) -> int:
        ...

    def count_tokens(self, message: Message) -> int:
        ...

    def count_tokens_range(self, messages: Sequence[Message], start: int, end: int) -> int:
        if start < 0 or end > len(messages) or start >= end:
            raise InvalidRangeError(start, end, len(messages))
        return sum(self.count_tokens(messages[i]) for i in range(start, end))
