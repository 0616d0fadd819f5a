from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from context_tailor.domain.models import Message
from context_tailor.ports.context_windows import ContextWindowResolver
from context_tailor.ports.tailoring import TailoringStrategy
from context_tailor.ports.tokens import TokenCounter
from context_tailor.use_cases.budget import Budget
from context_tailor.use_cases.prefix_sum import build_prefix_sum
from context_tailor.use_cases.segments import preserved_segments

log = logging.getLogger("context_tailor")


@dataclass(frozen=True)
class TailorResult:
    messages: List[Message]
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ContextTailor:
    """
    Точка входа для раннера: бюджет = окно модели - резерв под ответ - запас,
    либо явный max_input_tokens; дальше работает выбранная стратегия.

    Аргумент fit(max_input_tokens=...) берётся как есть, в том числе <= 0
    (тогда остаются только сохраняемые сегменты). Поле max_input_tokens
    задаётся из настроек, там 0 означает "вывести из окна модели".
    """
    counter: TokenCounter
    strategy: TailoringStrategy
    windows: ContextWindowResolver
    model_name: str = ""
    max_input_tokens: int = 0
    reserve_output_tokens: int = 1024
    safety_margin_tokens: int = 32
    log_events: bool = True

    def budget_for(self, model_name: Optional[str] = None) -> Budget:
        return Budget.for_model(
            self.windows,
            model_name or self.model_name,
            reserve_output_tokens=self.reserve_output_tokens,
            safety_margin_tokens=self.safety_margin_tokens,
        )

    def count(self, messages: Sequence[Message]) -> int:
        return build_prefix_sum(self.counter, messages)[-1]

    def fit(
        self,
        messages: Sequence[Message],
        *,
        model_name: Optional[str] = None,
        max_input_tokens: Optional[int] = None,
    ) -> TailorResult:
        model = model_name or self.model_name
        budget = self.budget_for(model)
        if max_input_tokens is None and self.max_input_tokens > 0:
            max_input_tokens = self.max_input_tokens
        explicit = max_input_tokens is not None
        limit = int(max_input_tokens) if explicit else budget.max_input_tokens

        fitted = self.strategy.tailor_messages(messages, limit)

        tokens_before = self.count(messages)
        tokens_after = self.count(fitted)
        seg = preserved_segments(messages)

        meta: Dict[str, Any] = {
            "strategy": getattr(self.strategy, "name", type(self.strategy).__name__),
            "model": model,
            "budget": {
                "max_context_tokens": budget.max_context_tokens,
                "reserve_output_tokens": budget.reserve_output_tokens,
                "max_input_tokens": limit,
                "explicit": explicit,
            },
            "preserved": {"head": seg.head, "tail": seg.tail},
            "messages_before": len(messages),
            "messages_after": len(fitted),
            "tokens_before": tokens_before,
            "tokens_after": tokens_after,
            "dropped_messages": len(messages) - len(fitted),
            "over_budget": tokens_after > limit,
        }

        if self.log_events:
            log.info(json.dumps({"event": "tailor", **meta}, ensure_ascii=False))

        return TailorResult(messages=fitted, meta=meta)
