from __future__ import annotations

from typing import Sequence, Tuple

from context_tailor.use_cases.prefix_sum import longest_fitting_prefix_end
from context_tailor.use_cases.tailoring import PrefixSumTailoring


class TailOutStrategy(PrefixSumTailoring):
    """
    Выкидывает самые новые сообщения свободной зоны (последний ход при этом сохраняется).
    Остаётся максимальное начало зоны, которое влезает в остаток бюджета.
    """

    name = "tail"

    def select_free_zone(self, prefix: Sequence[int], lo: int, hi: int, remaining: int) -> Tuple[int, int]:
        return longest_fitting_prefix_end(prefix, lo, hi, remaining), hi
