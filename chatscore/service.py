"""Analysis workflow tying the scorer to the backend store."""

from datetime import datetime, timezone

from loguru import logger

from .analyzers.scorer import ConversationScorer
from .constants import ErrorMessage, LogMessage
from .exceptions import EmptyConversationError, InvalidTranscriptError
from .models import AnalysisResult, Message
from .store import SupabaseStore


class AnalysisService:
    """Runs analyses against stored conversations.

    Fetches messages from the store, scores them, upserts the scorecard and
    stamps the conversation as analyzed. Repeat analyses replace the previous
    scorecard; concurrent analyses of one conversation are last-write-wins.

    Attributes:
        store: Backend store for messages, analyses and conversations.
        scorer: Scorer used for every analysis.
    """

    def __init__(
        self, *, store: SupabaseStore, scorer: ConversationScorer | None = None
    ):
        self.store = store
        self.scorer = scorer or ConversationScorer()

    async def analyze_conversation(self, *, conversation_id: str) -> AnalysisResult:
        """Analyze a stored conversation and persist the result.

        Args:
            conversation_id: ID of the conversation to analyze.

        Returns:
            AnalysisResult: The new scorecard.

        Raises:
            EmptyConversationError: If the conversation has no messages.
            StoreError: If the backend lookup or write fails.
        """
        messages = await self.store.fetch_messages(conversation_id=conversation_id)
        if not messages:
            raise EmptyConversationError()

        result = self.scorer.score(messages=messages)

        await self.store.upsert_analysis(conversation_id=conversation_id, result=result)
        await self.store.mark_analyzed(
            conversation_id=conversation_id, analyzed_at=datetime.now(timezone.utc)
        )

        logger.success(LogMessage.UPSERTED_ANALYSIS.format(conversation_id))
        return result

    async def analyze_pending(self, *, user_id: str) -> dict[str, AnalysisResult]:
        """Analyze every conversation of a user that has not been analyzed yet.

        Conversations without messages are logged and skipped.

        Args:
            user_id: Owner whose conversations to analyze.

        Returns:
            dict[str, AnalysisResult]: Scorecards keyed by conversation ID.
        """
        conversations = await self.store.list_conversations(user_id=user_id)
        pending = [convo for convo in conversations if not convo.is_analyzed]
        logger.info(LogMessage.PENDING_FOUND.format(len(pending)))

        results: dict[str, AnalysisResult] = {}
        for convo in pending:
            try:
                results[convo.id] = await self.analyze_conversation(
                    conversation_id=convo.id
                )
            except EmptyConversationError:
                logger.warning(LogMessage.SKIPPING_EMPTY.format(convo.id))

        return results

    async def upload_conversation(
        self, *, title: str, user_id: str, messages: list[Message]
    ) -> str:
        """Store a new conversation with its messages.

        Args:
            title: Conversation title.
            user_id: Owner of the conversation.
            messages: Transcript in chronological order.

        Returns:
            str: ID of the created conversation.

        Raises:
            InvalidTranscriptError: If the title or messages are empty.
        """
        if not title.strip():
            raise InvalidTranscriptError(ErrorMessage.MISSING_TITLE)
        if not messages:
            raise InvalidTranscriptError(ErrorMessage.MISSING_MESSAGES)

        conversation_id = await self.store.create_conversation(
            title=title.strip(), user_id=user_id
        )
        await self.store.insert_messages(
            conversation_id=conversation_id, messages=messages
        )

        logger.success(
            LogMessage.UPLOADED_CONVERSATION.format(conversation_id, len(messages))
        )
        return conversation_id
