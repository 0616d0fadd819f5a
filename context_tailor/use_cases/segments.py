from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from context_tailor.domain.models import Message


@dataclass(frozen=True)
class PreservedSegments:
    """
    head: ведущие system-сообщения
    tail: последний ход (от последнего user до конца)
    Инвариант: head + tail <= len(messages), при пересечении уступает head.
    """
    head: int
    tail: int


def preserved_head_count(messages: Sequence[Message]) -> int:
    count = 0
    for m in messages:
        if m.role != "system":
            break
        count += 1
    return count


def preserved_tail_count(messages: Sequence[Message]) -> int:
    if not messages:
        return 0
    for i in range(len(messages) - 1, -1, -1):
        if messages[i].role == "user":
            return len(messages) - i
    # нет ни одного user: держим только последнее сообщение
    return 1


def preserved_segments(messages: Sequence[Message]) -> PreservedSegments:
    n = len(messages)
    tail = min(preserved_tail_count(messages), n)
    head = min(preserved_head_count(messages), n - tail)
    return PreservedSegments(head=head, tail=tail)


def strip_leading_tool_messages(messages: Sequence[Message]) -> List[Message]:
    """tool-ответ без предшествующего вызова инструмента API не примут."""
    start = 0
    while start < len(messages) and messages[start].role == "tool":
        start += 1
    return list(messages[start:])


def build_preserved_only_result(messages: Sequence[Message], head: int, tail: int) -> List[Message]:
    n = len(messages)
    head = max(0, min(head, n))
    tail = max(0, min(tail, n - head))

    result: List[Message] = list(messages[:head])
    if tail > 0:
        result.extend(messages[n - tail:])
    return strip_leading_tool_messages(result)


def assemble(
    messages: Sequence[Message],
    *,
    head: int,
    kept_head_end: int,
    kept_tail_start: int,
    tail: int,
) -> List[Message]:
    """head-сегмент + [head:kept_head_end] + [kept_tail_start:n-tail] + tail-сегмент."""
    n = len(messages)
    free_end = n - tail

    result: List[Message] = list(messages[:head])
    if kept_head_end > head:
        result.extend(messages[head:kept_head_end])
    if kept_tail_start < free_end:
        result.extend(messages[max(kept_tail_start, kept_head_end):free_end])
    if tail > 0:
        result.extend(messages[free_end:])
    return strip_leading_tool_messages(result)
