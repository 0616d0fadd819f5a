import pytest

from context_tailor.adapters.tokens_approx import ApproxTokenCounter
from context_tailor.domain.errors import InvalidRangeError
from context_tailor.domain.models import Message, assistant_message, user_message
from context_tailor.use_cases.prefix_sum import (
    balanced_split,
    build_prefix_sum,
    longest_fitting_prefix_end,
    range_tokens,
    shortest_fitting_suffix_start,
)


class _FlakyCounter(ApproxTokenCounter):
    def count_tokens(self, message: Message) -> int:
        if "boom" in message.content:
            raise RuntimeError("tokenizer unavailable")
        return super().count_tokens(message)


def test_prefix_sum_is_cumulative():
    msgs = [user_message("a" * 8), assistant_message(""), user_message("b" * 5)]
    assert build_prefix_sum(ApproxTokenCounter(), msgs) == [0, 2, 2, 4]
    assert build_prefix_sum(ApproxTokenCounter(), []) == [0]


def test_prefix_sum_absorbs_counter_errors():
    msgs = [user_message("a" * 4), user_message("boom" * 3), user_message("c")]
    # "boom"*3 = 12 символов -> оценка 3
    assert build_prefix_sum(_FlakyCounter(), msgs) == [0, 1, 4, 5]


def test_prefix_sum_fallback_tolerates_non_text_content():
    # dataclass не проверяет типы, счётчик падает на len(int)
    msgs = [Message(role="user", content=12345), user_message("abcd")]
    assert build_prefix_sum(ApproxTokenCounter(), msgs) == [0, 2, 3]


def test_range_tokens():
    p = [0, 2, 2, 4]
    assert range_tokens(p, 0, 3) == 4
    assert range_tokens(p, 1, 1) == 0
    for start, end in [(-1, 1), (0, 4), (2, 1)]:
        with pytest.raises(InvalidRangeError):
            range_tokens(p, start, end)


def test_binary_searches_match_linear_scan():
    costs = [3, 1, 4, 1, 5, 9, 2, 6, 5, 3]
    p = [0]
    for c in costs:
        p.append(p[-1] + c)
    lo, hi = 1, 9

    for budget in range(0, 45):
        s = shortest_fitting_suffix_start(p, lo, hi, budget)
        assert s == min(i for i in range(lo, hi + 1) if p[hi] - p[i] <= budget)

        e = longest_fitting_prefix_end(p, lo, hi, budget)
        assert e == max(i for i in range(lo, hi + 1) if p[i] - p[lo] <= budget)


def test_balanced_split_keeps_both_ends():
    p = list(range(0, 110, 10))  # 10 сообщений по 10 токенов
    assert balanced_split(p, 0, 10, 40) == (2, 8)
    assert balanced_split(p, 0, 10, 45) == (2, 8)
    assert balanced_split(p, 0, 10, 1000) == (5, 5)
    assert balanced_split(p, 0, 10, 5) == (0, 10)


def test_balanced_split_fills_leftover_room():
    # хвост дорогой, голова дешёвая: после баланса добиваем с любой стороны
    costs = [1, 1, 1, 1, 1, 50, 50]
    p = [0]
    for c in costs:
        p.append(p[-1] + c)
    head_end, tail_start = balanced_split(p, 0, 7, 55)

    kept = (p[head_end] - p[0]) + (p[7] - p[tail_start])
    assert kept <= 55
    assert tail_start == 6
    assert head_end == 5
    # следующее сообщение ни с одной стороны уже не влезает
    assert kept + costs[head_end] > 55 or head_end == tail_start
