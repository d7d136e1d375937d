"""Data models for chat transcript scoring."""

from dataclasses import asdict, dataclass
from typing import Any

from .constants import (
    EMPTY_STRING,
    AnalysisKey,
    ConversationKey,
    ErrorMessage,
    MessageKey,
    MessageSender,
    Sentiment,
)
from .exceptions import InvalidTranscriptError


@dataclass(frozen=True)
class Message:
    """Represents a single message in a transcript.

    Attributes:
        sender: Who sent the message ('user' or 'ai').
        content: The text content of the message.
    """

    sender: MessageSender
    content: str

    @property
    def is_ai(self) -> bool:
        return self.sender == MessageSender.AI

    @property
    def is_user(self) -> bool:
        return self.sender == MessageSender.USER

    @classmethod
    def from_dict(cls, *, data: dict[str, Any]) -> "Message":
        """Create a Message from a dictionary.

        Handles both stored format (sender/content) and upload format
        (sender/message).

        Args:
            data: Dictionary containing message data.

        Returns:
            Message: A new Message instance populated with data from the dictionary.

        Raises:
            InvalidTranscriptError: If the sender is not 'user' or 'ai', or the
                content is not text.
        """
        raw_sender = data.get(MessageKey.SENDER, EMPTY_STRING)
        try:
            sender = MessageSender(str(raw_sender).lower())
        except ValueError:
            raise InvalidTranscriptError(
                f"Unknown message sender: {raw_sender!r}"
            ) from None

        content = data.get(MessageKey.MESSAGE) or data.get(
            MessageKey.CONTENT, EMPTY_STRING
        )
        if not isinstance(content, str):
            raise InvalidTranscriptError(
                f"Message content must be text, got {type(content).__name__}"
            )

        return cls(sender=sender, content=content)

    def to_dict(self) -> dict[str, str]:
        return {
            MessageKey.SENDER: str(self.sender),
            MessageKey.CONTENT: self.content,
        }


def parse_messages(*, data: Any) -> list[Message]:
    """Parse a transcript payload into an ordered list of messages.

    Args:
        data: Decoded JSON; must be a list of message dictionaries.

    Returns:
        list[Message]: Messages in the order given.

    Raises:
        InvalidTranscriptError: If the payload is not a list of dictionaries.
    """
    if not isinstance(data, list):
        raise InvalidTranscriptError(ErrorMessage.NOT_A_LIST)

    messages = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidTranscriptError(f"Message {idx} is not an object")
        messages.append(Message.from_dict(data=item))
    return messages


@dataclass
class Conversation:
    """A titled conversation owned by one user.

    Attributes:
        id: Unique identifier for the conversation.
        title: Display title given at upload.
        user_id: Owner of the conversation.
        created_at: Timestamp when the conversation was created.
        analyzed_at: Timestamp of the last successful analysis, if any.
    """

    id: str
    title: str
    user_id: str
    created_at: str = EMPTY_STRING
    analyzed_at: str | None = None

    @classmethod
    def from_dict(cls, *, data: dict[str, Any]) -> "Conversation":
        return cls(
            id=str(data.get(ConversationKey.ID, EMPTY_STRING)),
            title=data.get(ConversationKey.TITLE) or EMPTY_STRING,
            user_id=str(data.get(ConversationKey.USER_ID) or EMPTY_STRING),
            created_at=data.get(ConversationKey.CREATED_AT) or EMPTY_STRING,
            analyzed_at=data.get(ConversationKey.ANALYZED_AT),
        )

    @property
    def is_analyzed(self) -> bool:
        return self.analyzed_at is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AnalysisResult:
    """Quality scorecard for a single conversation.

    Bounded scores are in [0, 100]. ``overall_satisfaction_score`` is derived
    from the other fields by the scorer.

    Attributes:
        clarity_score: Penalises too-short, too-long and question-free AI replies.
        relevance_score: Penalises AI replies sharing no words with the user turn.
        accuracy_score: Penalises hedging phrases in AI replies.
        completeness_score: Penalises trailing-off and terse AI replies.
        sentiment: Customer sentiment from user messages.
        empathy_score: Rewards empathy phrases in AI replies.
        response_time_avg: Placeholder value, not a measured latency.
        resolution_rate: Whether an AI reply reports the issue as resolved.
        escalation_needed: Whether an AI reply mentions escalating.
        fallback_frequency: Count of fallback phrases in AI replies.
        overall_satisfaction_score: Headline score shown to the user.
    """

    clarity_score: float
    relevance_score: float
    accuracy_score: float
    completeness_score: float
    sentiment: Sentiment
    empathy_score: float
    response_time_avg: float
    resolution_rate: bool
    escalation_needed: bool
    fallback_frequency: int
    overall_satisfaction_score: float

    @classmethod
    def from_dict(cls, *, data: dict[str, Any]) -> "AnalysisResult":
        """Create an AnalysisResult from a stored record.

        Extra keys such as ``conversation_id`` or timestamps are ignored.

        Args:
            data: Flat analysis record.

        Returns:
            AnalysisResult: The parsed scorecard.
        """
        return cls(
            clarity_score=float(data[AnalysisKey.CLARITY_SCORE]),
            relevance_score=float(data[AnalysisKey.RELEVANCE_SCORE]),
            accuracy_score=float(data[AnalysisKey.ACCURACY_SCORE]),
            completeness_score=float(data[AnalysisKey.COMPLETENESS_SCORE]),
            sentiment=Sentiment(data[AnalysisKey.SENTIMENT]),
            empathy_score=float(data[AnalysisKey.EMPATHY_SCORE]),
            response_time_avg=float(data[AnalysisKey.RESPONSE_TIME_AVG]),
            resolution_rate=bool(data[AnalysisKey.RESOLUTION_RATE]),
            escalation_needed=bool(data[AnalysisKey.ESCALATION_NEEDED]),
            fallback_frequency=int(data[AnalysisKey.FALLBACK_FREQUENCY]),
            overall_satisfaction_score=float(
                data[AnalysisKey.OVERALL_SATISFACTION_SCORE]
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the scorecard to a flat dictionary for serialization.

        Returns:
            dict[str, Any]: Flat keyed analysis record.
        """
        data = asdict(self)
        data[AnalysisKey.SENTIMENT] = str(self.sentiment)
        return data

    def to_record(self, *, conversation_id: str) -> dict[str, Any]:
        """Flat record keyed by conversation, as stored by the analysis store."""
        return {AnalysisKey.CONVERSATION_ID: conversation_id, **self.to_dict()}
