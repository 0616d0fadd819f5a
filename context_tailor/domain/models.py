from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple
from uuid import uuid4

Role = Literal["system", "user", "assistant", "tool"]
PartType = Literal["text", "image", "audio", "file"]

ROLES = ("system", "user", "assistant", "tool")


def _new_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class ContentPart:
    """Один фрагмент мультимодального сообщения. Токены считаются только для text."""
    type: PartType = "text"
    text: Optional[str] = None
    url: Optional[str] = None
    data: Optional[bytes] = field(default=None, repr=False)


@dataclass(frozen=True)
class ToolCall:
    id: str
    name: str
    arguments: str = ""


@dataclass(frozen=True)
class Message:
    role: Role
    content: str = ""
    reasoning_content: str = ""
    content_parts: Tuple[ContentPart, ...] = ()
    tool_id: str = ""
    tool_name: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    id: str = field(default_factory=_new_id, compare=False)
    meta: Dict[str, Any] = field(default_factory=dict, compare=False)

    def text_parts(self) -> Tuple[str, ...]:
        return tuple(p.text for p in self.content_parts if p.type == "text" and p.text is not None)


def system_message(content: str) -> Message:
    return Message(role="system", content=content)


def user_message(content: str) -> Message:
    return Message(role="user", content=content)


def assistant_message(content: str, *, tool_calls: Tuple[ToolCall, ...] = ()) -> Message:
    return Message(role="assistant", content=content, tool_calls=tool_calls)


def tool_message(tool_id: str, tool_name: str, content: str) -> Message:
    return Message(role="tool", content=content, tool_id=tool_id, tool_name=tool_name)
