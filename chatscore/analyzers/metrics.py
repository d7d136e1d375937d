"""Rule-based quality metrics over an ordered list of messages.

Each metric is an independent reducer over the same message sequence. All
phrase matching is plain substring containment on lowercased text, and each
phrase counts at most once per message.
"""

import string
from collections.abc import Iterable, Sequence

from ..constants import (
    ACCURACY_BASE,
    ACCURACY_HEDGE_PENALTY,
    CLARITY_BASE,
    CLARITY_LONG_LENGTH,
    CLARITY_LONG_PENALTY,
    CLARITY_QUESTIONLESS_LENGTH,
    CLARITY_QUESTIONLESS_PENALTY,
    CLARITY_SHORT_LENGTH,
    CLARITY_SHORT_PENALTY,
    COMPLETENESS_BASE,
    COMPLETENESS_INCOMPLETE_PENALTY,
    COMPLETENESS_SHORT_LENGTH,
    COMPLETENESS_SHORT_PENALTY,
    ELLIPSIS,
    EMPATHY_BASE,
    EMPATHY_MAX_BONUS,
    EMPATHY_PHRASE_BONUS,
    EMPATHY_PHRASES,
    ESCALATION_KEYWORDS,
    ESCALATION_PENALTY,
    FALLBACK_PHRASES,
    HEDGING_PHRASES,
    MAX_SCORE,
    MIN_SCORE,
    NEGATIVE_KEYWORDS,
    POSITIVE_KEYWORDS,
    QUESTION_MARK,
    RELEVANCE_BASE,
    RELEVANCE_MIN_TOKEN_LENGTH,
    RELEVANCE_OFF_TOPIC_PENALTY,
    RESOLUTION_BONUS,
    RESOLUTION_KEYWORDS,
    RESPONSE_TIME_DEFAULT,
    RESPONSE_TIME_SINGLE_MESSAGE,
    Sentiment,
)
from ..models import Message


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]."""
    return float(max(MIN_SCORE, min(MAX_SCORE, value)))


def count_phrases(text: str, phrases: Iterable[str]) -> int:
    """Count how many of ``phrases`` occur in ``text``, case-insensitively.

    Args:
        text: Text to search.
        phrases: Lowercase phrases to look for.

    Returns:
        int: Number of distinct phrases contained in the text.
    """
    lowered = text.lower()
    return sum(1 for phrase in phrases if phrase in lowered)


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in phrases)


def _ai_messages(messages: Sequence[Message]) -> list[Message]:
    return [msg for msg in messages if msg.is_ai]


def analyze_clarity(messages: Sequence[Message]) -> float:
    """Score how readable the AI replies are.

    Penalises replies that are very short, very long, or long without asking
    the user anything.
    """
    score = CLARITY_BASE
    for msg in _ai_messages(messages):
        length = len(msg.content)
        if length < CLARITY_SHORT_LENGTH:
            score -= CLARITY_SHORT_PENALTY
        if length > CLARITY_LONG_LENGTH:
            score -= CLARITY_LONG_PENALTY
        question_marks = msg.content.count(QUESTION_MARK)
        if question_marks == 0 and length > CLARITY_QUESTIONLESS_LENGTH:
            score -= CLARITY_QUESTIONLESS_PENALTY
    return clamp_score(score)


def _words(text: str) -> set[str]:
    # whitespace tokens with surrounding punctuation removed; no stemming
    return {word.strip(string.punctuation) for word in text.lower().split()}


def _significant_overlap(first: str, second: str) -> int:
    first_words = _words(first)
    second_words = _words(second)
    return sum(
        1
        for word in first_words & second_words
        if len(word) > RELEVANCE_MIN_TOKEN_LENGTH
    )


def analyze_relevance(messages: Sequence[Message]) -> float:
    """Score whether AI replies stay on the user's topic.

    An AI reply that directly follows a user message and shares no word longer
    than three characters with it counts as off-topic.

    Words are whitespace-split and lose surrounding punctuation, so "order."
    matches "order". A plain whitespace split would treat those as different
    words; this scores "Hi, I need help with my order." answered by "Sure,
    can you please share your order ID?" as 90 rather than 75.
    """
    off_topic_count = 0
    for idx in range(1, len(messages)):
        previous, current = messages[idx - 1], messages[idx]
        if not (current.is_ai and previous.is_user):
            continue
        if _significant_overlap(previous.content, current.content) == 0:
            off_topic_count += 1
    return clamp_score(RELEVANCE_BASE - RELEVANCE_OFF_TOPIC_PENALTY * off_topic_count)


def analyze_accuracy(messages: Sequence[Message]) -> float:
    score = ACCURACY_BASE
    for msg in _ai_messages(messages):
        score -= ACCURACY_HEDGE_PENALTY * count_phrases(msg.content, HEDGING_PHRASES)
    return clamp_score(score)


def analyze_completeness(messages: Sequence[Message]) -> float:
    """Score whether AI replies are complete answers.

    Replies that trail off with an ellipsis or end on a question count as
    incomplete; short replies without a question lose points immediately.
    """
    score = COMPLETENESS_BASE
    incomplete_responses = 0
    for msg in _ai_messages(messages):
        if ELLIPSIS in msg.content or msg.content.endswith(QUESTION_MARK):
            incomplete_responses += 1
        if (
            len(msg.content) < COMPLETENESS_SHORT_LENGTH
            and QUESTION_MARK not in msg.content
        ):
            score -= COMPLETENESS_SHORT_PENALTY
    score -= COMPLETENESS_INCOMPLETE_PENALTY * incomplete_responses
    return clamp_score(score)


def analyze_sentiment(messages: Sequence[Message]) -> Sentiment:
    """Classify customer sentiment from user messages only."""
    positive_count = 0
    negative_count = 0
    for msg in messages:
        if not msg.is_user:
            continue
        positive_count += count_phrases(msg.content, POSITIVE_KEYWORDS)
        negative_count += count_phrases(msg.content, NEGATIVE_KEYWORDS)

    if positive_count > negative_count:
        return Sentiment.POSITIVE
    if negative_count > positive_count:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def analyze_empathy(messages: Sequence[Message]) -> float:
    empathy_count = sum(
        count_phrases(msg.content, EMPATHY_PHRASES) for msg in _ai_messages(messages)
    )
    score = EMPATHY_BASE + min(EMPATHY_PHRASE_BONUS * empathy_count, EMPATHY_MAX_BONUS)
    return clamp_score(score)


def analyze_response_time(messages: Sequence[Message]) -> float:
    # Placeholder: messages carry no timestamps, so no latency is measured.
    if len(messages) < 2:
        return float(RESPONSE_TIME_SINGLE_MESSAGE)
    return float(RESPONSE_TIME_DEFAULT)


def analyze_resolution(messages: Sequence[Message]) -> bool:
    return any(
        contains_any(msg.content, RESOLUTION_KEYWORDS) for msg in _ai_messages(messages)
    )


def analyze_escalation(messages: Sequence[Message]) -> bool:
    return any(
        contains_any(msg.content, ESCALATION_KEYWORDS) for msg in _ai_messages(messages)
    )


def analyze_fallback_frequency(messages: Sequence[Message]) -> int:
    """Count fallback phrases ("i don't know", ...) across all AI replies."""
    return sum(
        count_phrases(msg.content, FALLBACK_PHRASES) for msg in _ai_messages(messages)
    )


def calculate_overall_score(
    *,
    clarity_score: float,
    relevance_score: float,
    accuracy_score: float,
    completeness_score: float,
    empathy_score: float,
    response_time_avg: float,
    resolution_rate: bool,
    escalation_needed: bool,
) -> float:
    """Combine the numeric sub-scores into the overall satisfaction score.

    The six bounded scores are averaged, then a resolved conversation earns a
    bonus and one needing escalation takes a penalty.

    Returns:
        float: Overall satisfaction score in [0, 100].
    """
    scores = [
        clarity_score,
        relevance_score,
        accuracy_score,
        completeness_score,
        empathy_score,
        response_time_avg,
    ]
    average = sum(scores) / len(scores)

    if resolution_rate:
        average += RESOLUTION_BONUS
    if escalation_needed:
        average -= ESCALATION_PENALTY

    return clamp_score(average)
