from collections.abc import Callable
from datetime import datetime

import pytest

from chatscore.constants import MessageSender
from chatscore.models import AnalysisResult, Conversation, Message


def build_messages(pairs: list[tuple[str, str]]) -> list[Message]:
    return [Message(sender=MessageSender(sender), content=text) for sender, text in pairs]


class FakeStore:
    """In-memory stand-in for SupabaseStore."""

    def __init__(
        self,
        *,
        messages: dict[str, list[Message]] | None = None,
        conversations: list[Conversation] | None = None,
        error: Exception | None = None,
    ):
        self.messages = messages or {}
        self.conversations = conversations or []
        self.error = error
        self.analyses: dict[str, AnalysisResult] = {}
        self.analyzed: dict[str, datetime] = {}
        self.created: list[tuple[str, str, str]] = []
        self.fetch_calls = 0

    async def fetch_messages(self, *, conversation_id: str) -> list[Message]:
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.messages.get(conversation_id, []))

    async def upsert_analysis(
        self, *, conversation_id: str, result: AnalysisResult
    ) -> None:
        self.analyses[conversation_id] = result

    async def mark_analyzed(self, *, conversation_id: str, analyzed_at: datetime) -> None:
        self.analyzed[conversation_id] = analyzed_at

    async def list_conversations(self, *, user_id: str) -> list[Conversation]:
        return [c for c in self.conversations if c.user_id == user_id]

    async def create_conversation(self, *, title: str, user_id: str) -> str:
        conversation_id = f"conv-{len(self.created) + 1}"
        self.created.append((conversation_id, title, user_id))
        return conversation_id

    async def insert_messages(
        self, *, conversation_id: str, messages: list[Message]
    ) -> None:
        self.messages[conversation_id] = list(messages)


@pytest.fixture
def make_messages() -> Callable[[list[tuple[str, str]]], list[Message]]:
    return build_messages


@pytest.fixture
def order_conversation() -> list[Message]:
    return build_messages(
        [
            ("user", "Hi, I need help with my order."),
            ("ai", "Sure, can you please share your order ID?"),
        ]
    )


@pytest.fixture
def fake_store_factory() -> Callable[..., FakeStore]:
    return FakeStore
