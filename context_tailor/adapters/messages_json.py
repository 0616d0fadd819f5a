from __future__ import annotations

import json
from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, ValidationError

from context_tailor.domain.models import ContentPart, Message, ToolCall


class ContentPartIn(BaseModel):
    type: Literal["text", "image", "audio", "file"] = "text"
    text: Optional[str] = None
    url: Optional[str] = None


class ToolCallIn(BaseModel):
    id: str
    name: str
    arguments: str = ""


class MessageIn(BaseModel):
    """Внешняя форма сообщения. null в строковых полях и списках читается как пустое значение."""
    role: Literal["system", "user", "assistant", "tool"]
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    content_parts: Optional[List[ContentPartIn]] = None
    tool_id: Optional[str] = None
    tool_name: Optional[str] = None
    tool_calls: Optional[List[ToolCallIn]] = None
    id: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    def to_domain(self) -> Message:
        extra: Dict[str, Any] = {}
        if self.id:
            extra["id"] = self.id
        return Message(
            role=self.role,
            content=self.content or "",
            reasoning_content=self.reasoning_content or "",
            content_parts=tuple(
                ContentPart(type=p.type, text=p.text, url=p.url) for p in (self.content_parts or [])
            ),
            tool_id=self.tool_id or "",
            tool_name=self.tool_name or "",
            tool_calls=tuple(
                ToolCall(id=c.id, name=c.name, arguments=c.arguments) for c in (self.tool_calls or [])
            ),
            meta=dict(self.meta or {}),
            **extra,
        )


def message_to_dict(m: Message) -> Dict[str, Any]:
    d: Dict[str, Any] = {"role": m.role, "content": m.content}
    if m.reasoning_content:
        d["reasoning_content"] = m.reasoning_content
    if m.content_parts:
        d["content_parts"] = [
            {k: v for k, v in (("type", p.type), ("text", p.text), ("url", p.url)) if v is not None}
            for p in m.content_parts
        ]
    if m.tool_id:
        d["tool_id"] = m.tool_id
    if m.tool_name:
        d["tool_name"] = m.tool_name
    if m.tool_calls:
        d["tool_calls"] = [{"id": c.id, "name": c.name, "arguments": c.arguments} for c in m.tool_calls]
    if m.meta:
        d["meta"] = m.meta
    return d


def message_from_dict(d: Any) -> Message:
    try:
        return MessageIn.model_validate(d).to_domain()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(x) for x in err['loc']) or 'message'}: {err['msg']}" for err in e.errors()
        )
        raise ValueError(f"invalid message: {problems}") from e


def loads_messages(text: str) -> List[Message]:
    """Принимает либо список сообщений, либо {"messages": [...]}."""
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("messages")
    if not isinstance(data, list):
        raise ValueError("expected a JSON list of messages")
    return [message_from_dict(d) for d in data]


def dumps_messages(messages: Sequence[Message], *, indent: int | None = 2) -> str:
    return json.dumps([message_to_dict(m) for m in messages], ensure_ascii=False, indent=indent)


def _preview(m: Message, width: int = 100) -> str:
    text = (m.content or m.reasoning_content or next(iter(m.text_parts()), "")).strip()
    text = " ".join(text.split())
    if len(text) > width:
        text = text[: width - 3] + "..."
    return text


def summarize_head_tail(messages: Sequence[Message], head: int = 5, tail: int = 5) -> str:
    """Превью: первые head и последние tail сообщений, середина свёрнута в счётчик."""
    n = len(messages)
    lines: List[str] = []
    if n <= head + tail:
        idx = list(range(n))
    else:
        idx = list(range(head)) + [-1] + list(range(n - tail, n))

    for i in idx:
        if i == -1:
            lines.append(f"... ({n - head - tail} omitted)")
            continue
        lines.append(f"[{i}] {messages[i].role}: {_preview(messages[i])}")
    return "\n".join(lines) + ("\n" if lines else "")
