"""Prompt builder for support replies.

Produces the chat-completions message list: the fixed system policy, the FAQ
knowledge, then the (bounded) conversation history in order.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from llm.history import ChatTurn, bound_turns
from llm.prompts.support.store_policy import FAQ_KNOWLEDGE, SYSTEM_PROMPT


def build_messages(*, history: Sequence[ChatTurn], history_limit: int) -> List[Dict[str, str]]:
    bounded = bound_turns(history, history_limit)
    messages: List[Dict[str, str]] = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "system", "content": FAQ_KNOWLEDGE},
    ]
    messages.extend({"role": t["role"], "content": t["content"]} for t in bounded)
    return messages
