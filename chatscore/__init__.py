"""Chat transcript quality scoring package."""

from .analyzers.scorer import ConversationScorer, score
from .exceptions import (
    ChatScoreError,
    EmptyConversationError,
    InvalidTranscriptError,
    StoreError,
)
from .models import AnalysisResult, Conversation, Message, parse_messages
from .service import AnalysisService
from .storage import AnalysisStorage
from .store import SupabaseStore

__all__ = [
    "AnalysisResult",
    "AnalysisService",
    "AnalysisStorage",
    "ChatScoreError",
    "Conversation",
    "ConversationScorer",
    "EmptyConversationError",
    "InvalidTranscriptError",
    "Message",
    "StoreError",
    "SupabaseStore",
    "parse_messages",
    "score",
]
