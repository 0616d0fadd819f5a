from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from context_tailor.domain.models import Message
from context_tailor.ports.tailoring import TailoringStrategy
from context_tailor.ports.tokens import TokenCounter
from context_tailor.use_cases.prefix_sum import build_prefix_sum, range_tokens
from context_tailor.use_cases.segments import (
    assemble,
    build_preserved_only_result,
    preserved_segments,
    strip_leading_tool_messages,
)

log = logging.getLogger("context_tailor")


class PrefixSumTailoring(TailoringStrategy):
    """
    Общий скелет всех стратегий:
    - system-блок в начале и последний ход (от последнего user) не выкидываются никогда
    - если всё и так влезает, возвращается копия входа
    - если не влезают даже сохраняемые сегменты, возвращаются только они (бюджет может быть превышен)
    - иначе свободная зона между ними урезается по правилу стратегии (select_free_zone)
    - ведущие tool-сообщения в результате отбрасываются
    Вход не мутируется, результат всегда новый список.
    """

    name = "base"

    def __init__(self, counter: TokenCounter) -> None:
        self.counter = counter

    def select_free_zone(self, prefix: Sequence[int], lo: int, hi: int, remaining: int) -> Tuple[int, int]:
        """Вернуть (head_end, tail_start): в результат попадут [lo:head_end] и [tail_start:hi]."""
        raise NotImplementedError

    def tailor_messages(self, messages: Sequence[Message], max_tokens: int) -> List[Message]:
        if not messages:
            return []

        n = len(messages)
        seg = preserved_segments(messages)
        prefix = build_prefix_sum(self.counter, messages)

        total = range_tokens(prefix, 0, n)
        if total <= max_tokens:
            return strip_leading_tool_messages(messages)

        lo, hi = seg.head, n - seg.tail
        preserved_tokens = range_tokens(prefix, 0, lo) + range_tokens(prefix, hi, n)
        if preserved_tokens >= max_tokens:
            log.info(
                "preserved segments need %d tokens, budget is %d: returning preserved messages only",
                preserved_tokens, max_tokens,
            )
            return build_preserved_only_result(messages, seg.head, seg.tail)

        head_end, tail_start = self.select_free_zone(prefix, lo, hi, max_tokens - preserved_tokens)
        return assemble(
            messages,
            head=seg.head,
            kept_head_end=head_end,
            kept_tail_start=tail_start,
            tail=seg.tail,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(counter={self.counter!r})"
