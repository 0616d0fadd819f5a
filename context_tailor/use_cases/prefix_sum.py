"""
Префиксные суммы токенов и бинарный поиск точки отсечения.

prefix[i] = суммарная стоимость messages[0:i], prefix[0] = 0.
Массив неубывающий (стоимость сообщения >= 0), на этом держатся все поиски ниже.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from context_tailor.domain.errors import InvalidRangeError
from context_tailor.domain.estimates import approx_text_tokens
from context_tailor.domain.models import Message
from context_tailor.ports.tokens import TokenCounter

log = logging.getLogger("context_tailor")


def build_prefix_sum(counter: TokenCounter, messages: Sequence[Message]) -> List[int]:
    prefix = [0] * (len(messages) + 1)
    for i, m in enumerate(messages):
        try:
            tokens = counter.count_tokens(m)
        except Exception as e:
            tokens = approx_text_tokens(str(m.content or ""))
            log.debug("token counter failed for message %s (%s), using estimate %d", m.id, e, tokens)
        prefix[i + 1] = prefix[i] + max(0, int(tokens))
    return prefix


def range_tokens(prefix: Sequence[int], start: int, end: int) -> int:
    """Стоимость messages[start:end]. Пустой диапазон стоит 0."""
    if start < 0 or end > len(prefix) - 1 or start > end:
        raise InvalidRangeError(start, end, len(prefix) - 1)
    return prefix[end] - prefix[start]


def shortest_fitting_suffix_start(prefix: Sequence[int], lo: int, hi: int, budget: int) -> int:
    """Минимальный s из [lo, hi], при котором messages[s:hi] укладываются в budget."""
    left, right = lo, hi
    while left < right:
        mid = (left + right) // 2
        if prefix[hi] - prefix[mid] <= budget:
            right = mid
        else:
            left = mid + 1
    return left


def longest_fitting_prefix_end(prefix: Sequence[int], lo: int, hi: int, budget: int) -> int:
    """Максимальный e из [lo, hi], при котором messages[lo:e] укладываются в budget."""
    left, right = lo, hi
    while left < right:
        mid = (left + right + 1) // 2
        if prefix[mid] - prefix[lo] <= budget:
            left = mid
        else:
            right = mid - 1
    return left


def balanced_split(prefix: Sequence[int], lo: int, hi: int, budget: int) -> Tuple[int, int]:
    """
    Держим начало и конец зоны [lo, hi), выкидываем середину.
    1) бинпоиск по k: первые k // 2 и последние k - k // 2 сообщений
    2) добиваем хвост, затем голову, пока следующее сообщение влезает
    Возвращает (head_end, tail_start): оставляем [lo:head_end] и [tail_start:hi].
    """
    size = hi - lo

    def cost(k: int) -> int:
        h = k // 2
        t = k - h
        return (prefix[lo + h] - prefix[lo]) + (prefix[hi] - prefix[hi - t])

    left, right = 0, size
    while left < right:
        mid = (left + right + 1) // 2
        if cost(mid) <= budget:
            left = mid
        else:
            right = mid - 1

    head_end = lo + left // 2
    tail_start = hi - (left - left // 2)

    tail_start = shortest_fitting_suffix_start(prefix, head_end, tail_start, budget - cost(left))
    used = (prefix[head_end] - prefix[lo]) + (prefix[hi] - prefix[tail_start])
    head_end = longest_fitting_prefix_end(prefix, head_end, tail_start, budget - used)

    return head_end, tail_start
