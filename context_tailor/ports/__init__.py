from .context_windows import ContextWindowResolver
from .tailoring import TailoringStrategy
from .tokens import TokenCounter

__all__ = [
    "ContextWindowResolver",
    "TailoringStrategy",
    "TokenCounter",
]
