from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from context_tailor.domain.models import Message
from context_tailor.ports.tokens import TokenCounter


@dataclass
class TiktokenTokenCounter(TokenCounter):
    """
    Практичная версия для OpenAI-совместимых моделей:
    - per-message cost: tokens_per_message + tokens(content) + tokens(reasoning) + tokens(text parts)
      + tokens_per_name + tokens(tool_name), если есть
    - кодировка берётся по model_name, иначе encoding_name
    """
    model_name: Optional[str] = None
    encoding_name: str = "cl100k_base"
    tokens_per_message: int = 3
    tokens_per_name: int = 1
    encoding: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.encoding is not None:
            return
        import tiktoken
        if self.model_name:
            try:
                self.encoding = tiktoken.encoding_for_model(self.model_name)
                return
            except KeyError:
                pass
        self.encoding = tiktoken.get_encoding(self.encoding_name)

    def count_text(self, text: str) -> int:
        return len(self.encoding.encode(text or "", disallowed_special=()))

    def count_tokens(self, message: Message) -> int:
        total = self.tokens_per_message
        total += self.count_text(message.content)
        if message.reasoning_content:
            total += self.count_text(message.reasoning_content)
        for part in message.text_parts():
            total += self.count_text(part)
        if message.tool_name:
            total += self.tokens_per_name
            total += self.count_text(message.tool_name)
        return total
