from __future__ import annotations


class TailoringError(Exception):
    """Базовая ошибка движка подгонки контекста."""


class InvalidRangeError(TailoringError, ValueError):
    def __init__(self, start: int, end: int, length: int) -> None:
        super().__init__(f"invalid range: start={start}, end={end}, len={length}")
        self.start = start
        self.end = end
        self.length = length
