import pytest

from chatscore.constants import MessageSender, Sentiment
from chatscore.exceptions import InvalidTranscriptError
from chatscore.models import AnalysisResult, Conversation, Message, parse_messages


def test_message_accepts_upload_format():
    msg = Message.from_dict(data={"sender": "ai", "message": "Hello"})
    assert msg == Message(sender=MessageSender.AI, content="Hello")


def test_message_prefers_message_key():
    msg = Message.from_dict(data={"sender": "USER", "content": "a", "message": "b"})
    assert msg.sender == MessageSender.USER
    assert msg.content == "b"


def test_message_falls_back_to_content_when_message_empty():
    msg = Message.from_dict(data={"sender": "ai", "content": "a", "message": ""})
    assert msg.content == "a"


def test_message_rejects_unknown_sender():
    with pytest.raises(InvalidTranscriptError, match="sender"):
        Message.from_dict(data={"sender": "assistant", "content": "Hi"})


def test_message_rejects_non_text_content():
    with pytest.raises(InvalidTranscriptError):
        Message.from_dict(data={"sender": "user", "content": 42})


def test_message_is_immutable():
    msg = Message(sender=MessageSender.USER, content="hi")
    with pytest.raises(AttributeError):
        msg.content = "changed"


def test_parse_messages_keeps_order():
    messages = parse_messages(
        data=[
            {"sender": "user", "message": "first"},
            {"sender": "ai", "message": "second"},
        ]
    )
    assert [m.content for m in messages] == ["first", "second"]


@pytest.mark.parametrize("data", [{"sender": "user"}, "text", [1, 2]])
def test_parse_messages_rejects_bad_shapes(data):
    with pytest.raises(InvalidTranscriptError):
        parse_messages(data=data)


def test_conversation_from_record():
    convo = Conversation.from_dict(
        data={
            "id": "c1",
            "title": "Order issue",
            "user_id": "u1",
            "created_at": "2024-05-01T10:00:00Z",
            "analyzed_at": None,
        }
    )
    assert convo.id == "c1"
    assert not convo.is_analyzed


def test_analysis_record_is_flat_and_parses_back():
    result = AnalysisResult(
        clarity_score=85.0,
        relevance_score=90.0,
        accuracy_score=80.0,
        completeness_score=75.0,
        sentiment=Sentiment.POSITIVE,
        empathy_score=65.0,
        response_time_avg=85.0,
        resolution_rate=True,
        escalation_needed=False,
        fallback_frequency=2,
        overall_satisfaction_score=85.0,
    )

    record = result.to_record(conversation_id="c1")

    assert record["conversation_id"] == "c1"
    assert record["sentiment"] == "positive"
    assert not any(isinstance(v, dict) for v in record.values())
    assert AnalysisResult.from_dict(data={**record, "id": "row-1"}) == result
