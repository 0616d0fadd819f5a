import pytest

from context_tailor.adapters.messages_json import (
    dumps_messages,
    loads_messages,
    message_from_dict,
    message_to_dict,
    summarize_head_tail,
)
from context_tailor.domain.models import ContentPart, Message, ToolCall, user_message


def test_message_dict_keeps_all_text_fields():
    m = Message(
        role="assistant",
        content="calling",
        reasoning_content="need a tool",
        content_parts=(ContentPart(type="text", text="part"), ContentPart(type="image", url="http://x/i.png")),
        tool_calls=(ToolCall(id="call_1", name="calc", arguments='{"q": "2+2"}'),),
    )
    d = message_to_dict(m)
    assert d["content_parts"][1] == {"type": "image", "url": "http://x/i.png"}
    assert message_from_dict(d) == m


def test_loads_accepts_list_or_envelope():
    text = '[{"role": "system", "content": "s"}, {"role": "tool", "content": "r", "tool_id": "c1", "tool_name": "t"}]'
    msgs = loads_messages(text)
    assert [m.role for m in msgs] == ["system", "tool"]
    assert msgs[1].tool_id == "c1"

    env = loads_messages('{"messages": [{"role": "user", "content": "hi", "id": "u1"}]}')
    assert env[0].id == "u1"

    assert loads_messages(dumps_messages(msgs)) == msgs


def test_loads_rejects_bad_input():
    with pytest.raises(ValueError):
        loads_messages('{"nope": 1}')
    with pytest.raises(ValueError):
        message_from_dict({"role": "narrator", "content": "x"})


def test_summarize_head_tail_collapses_middle():
    msgs = [user_message(f"m{i}") for i in range(12)]
    out = summarize_head_tail(msgs, 2, 2)
    assert out.splitlines() == ["[0] user: m0", "[1] user: m1", "... (8 omitted)", "[10] user: m10", "[11] user: m11"]
    assert summarize_head_tail([], 2, 2) == ""


def test_from_dict_checks_field_types():
    with pytest.raises(ValueError, match="content"):
        message_from_dict({"role": "user", "content": 5})
    with pytest.raises(ValueError, match="content_parts"):
        message_from_dict({"role": "user", "content": "x", "content_parts": "abc"})
    with pytest.raises(ValueError):
        message_from_dict({"role": "assistant", "tool_calls": [{"name": "calc"}]})
    with pytest.raises(ValueError):
        loads_messages('["just a string"]')


def test_from_dict_reads_null_as_empty():
    m = message_from_dict({"role": "assistant", "content": None, "tool_calls": None, "meta": None})
    assert m.content == ""
    assert m.tool_calls == ()
    assert m.meta == {}
