from __future__ import annotations

import math

# 1 токен ~ 4 символа (кодовые точки, не байты)
APPROX_CHARS_PER_TOKEN = 4


def approx_text_tokens(text: str) -> int:
    if not text:
        return 0
    return math.ceil(len(text) / APPROX_CHARS_PER_TOKEN)
