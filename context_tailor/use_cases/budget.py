from __future__ import annotations

from dataclasses import dataclass

from context_tailor.ports.context_windows import ContextWindowResolver


@dataclass(frozen=True)
class Budget:
    max_context_tokens: int
    reserve_output_tokens: int
    safety_margin_tokens: int = 32

    @property
    def max_input_tokens(self) -> int:
        value = self.max_context_tokens - self.reserve_output_tokens - self.safety_margin_tokens
        return max(0, int(value))

    @staticmethod
    def for_model(
        resolver: ContextWindowResolver,
        model_name: str,
        *,
        reserve_output_tokens: int,
        safety_margin_tokens: int = 32,
    ) -> "Budget":
        return Budget(
            max_context_tokens=resolver.resolve(model_name),
            reserve_output_tokens=reserve_output_tokens,
            safety_margin_tokens=safety_margin_tokens,
        )
