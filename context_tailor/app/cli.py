from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from context_tailor.adapters.messages_json import dumps_messages, loads_messages, summarize_head_tail
from context_tailor.app.settings import STRATEGIES, TOKENIZERS, AppSettings
from context_tailor.app.wiring import build_tailor


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Fit a chat history into a model context window.")
    parser.add_argument("input", nargs="?", default="-", help="JSON file with messages, '-' for stdin")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default=None)
    parser.add_argument("--tokenizer", choices=sorted(TOKENIZERS), default=None)
    parser.add_argument("--model", default=None)
    parser.add_argument("--max-input-tokens", type=int, default=None)
    parser.add_argument("--reserve-output", type=int, default=None)
    parser.add_argument("--count", action="store_true", help="Only print token statistics")
    parser.add_argument("--window", metavar="MODEL", default=None, help="Print resolved context window and exit")
    parser.add_argument("--show", action="store_true", help="Print head/tail preview instead of JSON")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format="%(message)s")

    settings = AppSettings.from_env()

    t = settings.tailor
    if args.strategy is not None:
        t = replace(t, strategy=args.strategy)
    if args.tokenizer is not None:
        t = replace(t, tokenizer_backend=args.tokenizer)
    if args.model is not None:
        t = replace(t, model_name=args.model)
    if args.reserve_output is not None:
        t = replace(t, reserve_output_tokens=args.reserve_output)
    if args.debug:
        t = replace(t, log_events=True)
    settings = replace(settings, tailor=t)

    svc = build_tailor(settings)

    if args.window is not None:
        print(json.dumps({"model": args.window, "context_window": svc.windows.resolve(args.window)}))
        return

    try:
        messages = loads_messages(_read_input(args.input))
    except (OSError, ValueError) as e:
        parser.error(f"cannot read messages from {args.input}: {e}")

    if args.count:
        per: List[int] = [svc.counter.count_tokens(m) for m in messages]
        print(json.dumps({"messages": len(messages), "tokens": sum(per), "per_message": per}))
        return

    res = svc.fit(messages, max_input_tokens=args.max_input_tokens)

    if args.show:
        print(f"messages={res.meta['messages_before']}->{res.meta['messages_after']} "
              f"tokens={res.meta['tokens_before']}->{res.meta['tokens_after']} "
              f"budget={res.meta['budget']['max_input_tokens']}")
        print(summarize_head_tail(res.messages), end="")
    else:
        print(dumps_messages(res.messages))

    if args.debug:
        print("debug> " + json.dumps(res.meta, ensure_ascii=False, indent=2), file=sys.stderr)


if __name__ == "__main__":
    main()
