from .context_windows_memory import InMemoryContextWindowRegistry
from .tailor_head_out import HeadOutStrategy
from .tailor_middle_out import MiddleOutStrategy
from .tailor_tail_out import TailOutStrategy
from .tokens_approx import ApproxTokenCounter

__all__ = [
    "InMemoryContextWindowRegistry",
    "HeadOutStrategy", "MiddleOutStrategy", "TailOutStrategy",
    "ApproxTokenCounter",
]
