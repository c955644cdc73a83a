"""History bounding and prompt assembly."""

from types import SimpleNamespace

from api.features.chat.entities import Direction, Message
from llm.history import bound_turns, role_for_direction, to_turns
from llm.prompt_assembler import build_messages
from llm.prompts.support.store_policy import FAQ_KNOWLEDGE, SYSTEM_PROMPT


def _turns(n):
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"}
        for i in range(n)
    ]


class TestHistoryBounding:
    def test_role_mapping(self):
        assert role_for_direction("inbound") == "user"
        assert role_for_direction("outbound") == "assistant"

    def test_to_turns_preserves_order(self):
        messages = [
            SimpleNamespace(direction="inbound", content="hi"),
            SimpleNamespace(direction="outbound", content="hello"),
        ]
        assert to_turns(messages) == [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]

    def test_to_turns_accepts_message_entities(self):
        messages = [
            Message(conversation_id="c1", direction=Direction.INBOUND, content="where is it?"),
            Message(conversation_id="c1", direction=Direction.OUTBOUND, content="on its way"),
        ]
        assert to_turns(messages) == [
            {"role": "user", "content": "where is it?"},
            {"role": "assistant", "content": "on its way"},
        ]

    def test_keeps_last_n(self):
        bounded = bound_turns(_turns(30), 20)
        assert len(bounded) == 20
        assert bounded[0]["content"] == "turn 10"
        assert bounded[-1]["content"] == "turn 29"

    def test_short_history_unchanged(self):
        turns = _turns(3)
        assert bound_turns(turns, 20) == turns


class TestBuildMessages:
    def test_fixed_texts_come_first(self):
        messages = build_messages(history=_turns(2), history_limit=20)
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1] == {"role": "system", "content": FAQ_KNOWLEDGE}
        assert [m["content"] for m in messages[2:]] == ["turn 0", "turn 1"]

    def test_history_is_bounded_again(self):
        messages = build_messages(history=_turns(50), history_limit=20)
        assert len(messages) == 22
        assert messages[-1]["content"] == "turn 49"

    def test_empty_history(self):
        assert len(build_messages(history=[], history_limit=20)) == 2

    def test_policy_text_mentions_return_window(self):
        assert "within 30 days of delivery" in SYSTEM_PROMPT
        assert "Returns are accepted within 30 days of delivery." in FAQ_KNOWLEDGE
