from __future__ import annotations

from typing import Sequence, Tuple

from context_tailor.use_cases.prefix_sum import balanced_split
from context_tailor.use_cases.tailoring import PrefixSumTailoring


class MiddleOutStrategy(PrefixSumTailoring):
    """
    Выкидывает середину свободной зоны, оставляя её начало и конец поровну.

    Модели с длинным контекстом хуже всего "видят" середину последовательности
    (lost in the middle, U-образное внимание), поэтому при нехватке места
    середину жертвовать выгоднее всего. Это эвристика: если важнее свежесть
    или исходная постановка задачи, берите HeadOut или TailOut.
    """

    name = "middle"

    def select_free_zone(self, prefix: Sequence[int], lo: int, hi: int, remaining: int) -> Tuple[int, int]:
        return balanced_split(prefix, lo, hi, remaining)
