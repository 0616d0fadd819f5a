from __future__ import annotations

from typing import Sequence, Tuple

from context_tailor.use_cases.prefix_sum import shortest_fitting_suffix_start
from context_tailor.use_cases.tailoring import PrefixSumTailoring


class HeadOutStrategy(PrefixSumTailoring):
    """
    Выкидывает самые старые сообщения свободной зоны.
    Остаётся максимальный хвост зоны, который влезает в остаток бюджета.
    """

    name = "head"

    def select_free_zone(self, prefix: Sequence[int], lo: int, hi: int, remaining: int) -> Tuple[int, int]:
        return lo, shortest_fitting_suffix_start(prefix, lo, hi, remaining)
