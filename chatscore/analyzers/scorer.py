"""Rule-based conversation scorer."""

from collections.abc import Sequence

from loguru import logger

from ..constants import LogMessage
from ..exceptions import EmptyConversationError
from ..models import AnalysisResult, Message
from . import metrics


class ConversationScorer:
    """Scores a conversation transcript using simple text-pattern rules.

    Derives ten independent sub-scores from the ordered messages:
    - Clarity, relevance, accuracy and completeness of AI replies
    - Customer sentiment from user messages
    - Empathy shown by AI replies
    - Response time (placeholder)
    - Whether the issue was resolved or needs escalation
    - How often the AI fell back to "I don't know"

    and combines the numeric ones into an overall satisfaction score.

    The scorer holds no state; the same messages always produce the same
    result.
    """

    def score(self, *, messages: Sequence[Message]) -> AnalysisResult:
        """Score an ordered list of messages.

        Args:
            messages: Messages in chronological order.

        Returns:
            AnalysisResult: The full scorecard.

        Raises:
            EmptyConversationError: If ``messages`` is empty.
        """
        if not messages:
            raise EmptyConversationError()

        logger.debug(LogMessage.SCORING_HEADER)
        logger.debug(
            LogMessage.SCORING_MESSAGES.format(
                len(messages), sum(1 for msg in messages if msg.is_ai)
            )
        )

        clarity_score = metrics.analyze_clarity(messages)
        relevance_score = metrics.analyze_relevance(messages)
        accuracy_score = metrics.analyze_accuracy(messages)
        completeness_score = metrics.analyze_completeness(messages)
        sentiment = metrics.analyze_sentiment(messages)
        empathy_score = metrics.analyze_empathy(messages)
        response_time_avg = metrics.analyze_response_time(messages)
        resolution_rate = metrics.analyze_resolution(messages)
        escalation_needed = metrics.analyze_escalation(messages)
        fallback_frequency = metrics.analyze_fallback_frequency(messages)

        overall_satisfaction_score = metrics.calculate_overall_score(
            clarity_score=clarity_score,
            relevance_score=relevance_score,
            accuracy_score=accuracy_score,
            completeness_score=completeness_score,
            empathy_score=empathy_score,
            response_time_avg=response_time_avg,
            resolution_rate=resolution_rate,
            escalation_needed=escalation_needed,
        )

        result = AnalysisResult(
            clarity_score=clarity_score,
            relevance_score=relevance_score,
            accuracy_score=accuracy_score,
            completeness_score=completeness_score,
            sentiment=sentiment,
            empathy_score=empathy_score,
            response_time_avg=response_time_avg,
            resolution_rate=resolution_rate,
            escalation_needed=escalation_needed,
            fallback_frequency=fallback_frequency,
            overall_satisfaction_score=overall_satisfaction_score,
        )

        logger.debug(LogMessage.SCORED.format(overall_satisfaction_score))
        return result


def score(messages: Sequence[Message]) -> AnalysisResult:
    """Score ``messages`` with a default :class:`ConversationScorer`."""
    return ConversationScorer().score(messages=messages)
