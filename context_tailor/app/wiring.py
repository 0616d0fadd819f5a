from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, Tuple

from context_tailor.app.settings import AppSettings
from context_tailor.ports.tailoring import TailoringStrategy
from context_tailor.ports.tokens import TokenCounter

from context_tailor.adapters.context_windows_memory import InMemoryContextWindowRegistry
from context_tailor.adapters.tailor_head_out import HeadOutStrategy
from context_tailor.adapters.tailor_middle_out import MiddleOutStrategy
from context_tailor.adapters.tailor_tail_out import TailOutStrategy
from context_tailor.adapters.tokens_approx import ApproxTokenCounter

from context_tailor.use_cases.context_tailor import ContextTailor

log = logging.getLogger("context_tailor")

_STRATEGIES = {
    "head": HeadOutStrategy,
    "head_out": HeadOutStrategy,
    "tail": TailOutStrategy,
    "tail_out": TailOutStrategy,
    "middle": MiddleOutStrategy,
    "middle_out": MiddleOutStrategy,
}


def build_strategy(name: str, counter: TokenCounter) -> TailoringStrategy:
    key = (name or "middle").strip().lower().replace("-", "_")
    cls = _STRATEGIES.get(key)
    if cls is None:
        raise ValueError(f"unknown strategy: {name!r}. Allowed: {sorted(_STRATEGIES)}")
    return cls(counter)


def build_counter(backend: str, *, model_name: str = "") -> TokenCounter:
    if backend == "tiktoken":
        try:
            from context_tailor.adapters.tokens_tiktoken import TiktokenTokenCounter
            return TiktokenTokenCounter(model_name=model_name or None)
        except Exception as e:
            # нет пакета или не скачалась кодировка
            log.warning("tiktoken counter init failed (%s), falling back to approx", e)
    return ApproxTokenCounter()


# -----------------------
# Internal shared cache
# -----------------------
_cache_lock = Lock()
_shared: Dict[Tuple[Any, ...], Dict[str, Any]] = {}


def _settings_key(s: AppSettings) -> Tuple[Any, ...]:
    t = s.tailor
    return (
        t.tokenizer_backend,
        t.model_name,
        tuple(sorted(s.context_windows.items())),
    )


def _build_shared(settings: AppSettings) -> Dict[str, Any]:
    counter = build_counter(settings.tailor.tokenizer_backend, model_name=settings.tailor.model_name)

    windows = InMemoryContextWindowRegistry()
    for name, size in settings.context_windows.items():
        windows.register(name, size)

    return {
        "counter": counter,
        "windows": windows,
    }


def build_tailor(settings: AppSettings, *, strategy: str | None = None) -> ContextTailor:
    key = _settings_key(settings)

    with _cache_lock:
        shared = _shared.get(key)
        if shared is None:
            shared = _build_shared(settings)
            _shared[key] = shared

    counter: TokenCounter = shared["counter"]
    windows: InMemoryContextWindowRegistry = shared["windows"]

    t = settings.tailor
    return ContextTailor(
        counter=counter,
        strategy=build_strategy(strategy or t.strategy, counter),
        windows=windows,
        model_name=t.model_name,
        max_input_tokens=t.max_input_tokens,
        reserve_output_tokens=t.reserve_output_tokens,
        safety_margin_tokens=t.safety_margin_tokens,
        log_events=t.log_events,
    )
