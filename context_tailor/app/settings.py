from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict

STRATEGIES = {"head", "tail", "middle"}
TOKENIZERS = {"approx", "tiktoken"}


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_choice(name: str, default: str, allowed: set[str]) -> str:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    val = v.strip().lower()
    return val if val in allowed else default


def _env_windows(name: str) -> Dict[str, int]:
    """CT_CONTEXT_WINDOWS="my-model=32000,other=8192". Битые пары пропускаются."""
    v = os.getenv(name)
    out: Dict[str, int] = {}
    if v is None or v.strip() == "":
        return out
    for item in v.split(","):
        key, sep, size = item.partition("=")
        if not sep or not key.strip():
            continue
        try:
            n = int(size)
        except ValueError:
            continue
        if n > 0:
            out[key.strip().lower()] = n
    return out


@dataclass(frozen=True)
class TailorSettings:
    strategy: str = "middle"           # head | tail | middle
    tokenizer_backend: str = "approx"  # approx | tiktoken
    model_name: str = "gpt-4o-mini"

    max_input_tokens: int = 0  # 0 = считать из окна модели
    reserve_output_tokens: int = 1024
    safety_margin_tokens: int = 32

    log_events: bool = True


@dataclass(frozen=True)
class AppSettings:
    tailor: TailorSettings = TailorSettings()
    context_windows: Dict[str, int] = field(default_factory=dict)

    @staticmethod
    def from_env() -> "AppSettings":
        t = TailorSettings(
            strategy=_env_choice("CT_STRATEGY", TailorSettings.strategy, STRATEGIES),
            tokenizer_backend=_env_choice("CT_TOKENIZER", TailorSettings.tokenizer_backend, TOKENIZERS),
            model_name=_env_str("CT_MODEL", TailorSettings.model_name),

            max_input_tokens=_env_int("CT_MAX_INPUT_TOKENS", TailorSettings.max_input_tokens),
            reserve_output_tokens=_env_int("CT_RESERVE_OUTPUT", TailorSettings.reserve_output_tokens),
            safety_margin_tokens=_env_int("CT_SAFETY_MARGIN", TailorSettings.safety_margin_tokens),

            log_events=_env_bool("CT_LOG_EVENTS", TailorSettings.log_events),
        )

        return AppSettings(
            tailor=t,
            context_windows=_env_windows("CT_CONTEXT_WINDOWS"),
        )
