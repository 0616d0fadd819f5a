from __future__ import annotations

from dataclasses import dataclass

from context_tailor.domain.estimates import approx_text_tokens
from context_tailor.domain.models import Message
from context_tailor.ports.tokens import TokenCounter


@dataclass(frozen=True)
class ApproxTokenCounter(TokenCounter):
    """
    Грубая оценка без токенизатора:
    - ceil(символы / 4) отдельно для content, reasoning_content и каждой текстовой части
    - бинарные части (image/audio/file) стоят 0
    - если content непустой, сообщение стоит минимум 1 токен;
      при пустом content минимум не применяется (пустая заглушка стоит 0)
    """

    def count_text(self, text: str) -> int:
        return approx_text_tokens(text)

    def count_tokens(self, message: Message) -> int:
        total = approx_text_tokens(message.content)
        total += approx_text_tokens(message.reasoning_content)
        for part in message.text_parts():
            total += approx_text_tokens(part)

        if message.content:
            return max(total, 1)
        return total
