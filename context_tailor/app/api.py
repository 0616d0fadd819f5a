from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from context_tailor.adapters.messages_json import MessageIn, message_to_dict
from context_tailor.app.settings import AppSettings
from context_tailor.app.wiring import build_tailor
from context_tailor.domain.errors import InvalidRangeError

logging.basicConfig(level=logging.INFO, format="%(message)s")
log = logging.getLogger("context_tailor")

app = FastAPI(title="context_tailor")
settings = AppSettings.from_env()


class TailorRequest(BaseModel):
    messages: List[MessageIn]
    model: Optional[str] = None
    strategy: Optional[str] = None
    max_input_tokens: Optional[int] = None


class TailorResponse(BaseModel):
    messages: List[Dict[str, Any]]
    meta: Dict[str, Any]


class CountRequest(BaseModel):
    messages: List[MessageIn]
    start: Optional[int] = None
    end: Optional[int] = None


class ContextWindowIn(BaseModel):
    size: int


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/tailor", response_model=TailorResponse)
def tailor(req: TailorRequest):
    try:
        svc = build_tailor(settings, strategy=req.strategy)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    msgs = [m.to_domain() for m in req.messages]
    res = svc.fit(msgs, model_name=req.model, max_input_tokens=req.max_input_tokens)
    return TailorResponse(messages=[message_to_dict(m) for m in res.messages], meta=res.meta)


@app.post("/tokens/count")
def count_tokens(req: CountRequest):
    svc = build_tailor(settings)
    msgs = [m.to_domain() for m in req.messages]
    start = 0 if req.start is None else req.start
    end = len(msgs) if req.end is None else req.end

    try:
        total = svc.counter.count_tokens_range(msgs, start, end)
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "start": start,
        "end": end,
        "tokens": total,
        "per_message": [svc.counter.count_tokens(m) for m in msgs[start:end]],
    }


@app.get("/models/{name}/context-window")
def get_context_window(name: str):
    svc = build_tailor(settings)
    return {"model": name, "context_window": svc.windows.resolve(name)}


@app.put("/models/{name}/context-window")
def put_context_window(name: str, body: ContextWindowIn):
    svc = build_tailor(settings)
    try:
        svc.windows.register(name, body.size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    log.info(json.dumps({"event": "register_context_window", "model": name, "size": body.size}, ensure_ascii=False))
    return {"model": name, "context_window": svc.windows.resolve(name)}
