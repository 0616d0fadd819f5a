from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from context_tailor.domain.models import Message


@runtime_checkable
class TailoringStrategy(Protocol):
    """Урезает историю под бюджет токенов, сохраняя system-блок и последний ход."""

    def tailor_messages(self, messages: Sequence[Message], max_tokens: int) -> list[Message]:
        ...
