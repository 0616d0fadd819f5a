from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ContextWindowResolver(Protocol):
    """Имя модели -> размер контекстного окна (в токенах)."""

    def resolve(self, model_name: str) -> int:
        ...

    def register(self, model_name: str, size: int) -> None:
        ...
