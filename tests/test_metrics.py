import pytest

from chatscore.analyzers import metrics
from chatscore.constants import Sentiment


def test_clarity_base_for_reasonable_reply(order_conversation):
    assert metrics.analyze_clarity(order_conversation) == 85


def test_clarity_penalises_short_reply(make_messages):
    messages = make_messages([("user", "Where is it?"), ("ai", "Ok.")])
    assert metrics.analyze_clarity(messages) == 80


def test_clarity_penalises_long_reply_without_question(make_messages):
    messages = make_messages([("ai", "a" * 1001)])
    # too long (-3) and long without a question (-5)
    assert metrics.analyze_clarity(messages) == 77


def test_clarity_long_reply_with_question(make_messages):
    messages = make_messages([("ai", "a" * 1000 + "?")])
    assert metrics.analyze_clarity(messages) == 82


def test_clarity_penalises_questionless_paragraph(make_messages):
    messages = make_messages([("ai", "word " * 30)])
    assert metrics.analyze_clarity(messages) == 80


def test_clarity_ignores_user_messages(make_messages):
    messages = make_messages([("user", "hi"), ("user", "x" * 2000)])
    assert metrics.analyze_clarity(messages) == 85


def test_clarity_clamps_at_zero(make_messages):
    messages = make_messages([("ai", "ok")] * 20)
    assert metrics.analyze_clarity(messages) == 0


def test_relevance_shared_word(make_messages):
    messages = make_messages(
        [("user", "Where is my package"), ("ai", "Your package is on its way")]
    )
    assert metrics.analyze_relevance(messages) == 90


def test_relevance_is_case_insensitive(make_messages):
    messages = make_messages([("user", "PACKAGE lost"), ("ai", "your package")])
    assert metrics.analyze_relevance(messages) == 90


def test_relevance_ignores_short_shared_words(make_messages):
    messages = make_messages([("user", "how are you"), ("ai", "you are fine")])
    assert metrics.analyze_relevance(messages) == 75


def test_relevance_ignores_surrounding_punctuation(order_conversation):
    # "order." matches "order"
    assert metrics.analyze_relevance(order_conversation) == 90


def test_relevance_does_not_stem(make_messages):
    messages = make_messages([("user", "My orders are late"), ("ai", "Which order?")])
    assert metrics.analyze_relevance(messages) == 75


def test_relevance_counts_each_off_topic_reply(make_messages):
    messages = make_messages(
        [
            ("user", "Hello"),
            ("ai", "Hi there"),
            ("user", "Refund please"),
            ("ai", "Sure thing"),
            ("user", "When exactly"),
            ("ai", "Soon"),
        ]
    )
    assert metrics.analyze_relevance(messages) == 45


def test_relevance_clamps_at_zero(make_messages):
    messages = make_messages([("user", "Hello"), ("ai", "Hi")] * 7)
    assert metrics.analyze_relevance(messages) == 0


def test_relevance_only_checks_replies_to_user(make_messages):
    messages = make_messages(
        [
            ("user", "where is my package"),
            ("ai", "your package ships soon"),
            ("ai", "anything else"),
        ]
    )
    assert metrics.analyze_relevance(messages) == 90


def test_relevance_skips_leading_ai_message(make_messages):
    messages = make_messages([("ai", "Welcome to support")])
    assert metrics.analyze_relevance(messages) == 90


def test_accuracy_counts_each_hedge_once_per_message(make_messages):
    messages = make_messages([("ai", "Maybe, maybe, maybe.")])
    assert metrics.analyze_accuracy(messages) == 75


def test_accuracy_ignores_user_hedging(make_messages):
    messages = make_messages([("user", "I think maybe probably"), ("ai", "Got it")])
    assert metrics.analyze_accuracy(messages) == 80


def test_completeness_trailing_ellipsis_and_short(make_messages):
    messages = make_messages([("ai", "Let me check...")])
    assert metrics.analyze_completeness(messages) == 70


def test_completeness_question_ending(make_messages):
    messages = make_messages([("ai", "Anything else?")])
    assert metrics.analyze_completeness(messages) == 75


def test_completeness_full_answer(make_messages):
    messages = make_messages([("ai", "Your order ships tomorrow morning.")])
    assert metrics.analyze_completeness(messages) == 85


def test_completeness_clamps_at_zero(make_messages):
    messages = make_messages([("ai", "Hmm...")] * 10)
    assert metrics.analyze_completeness(messages) == 0


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("This is great, thank you", Sentiment.POSITIVE),
        ("This is terrible and I am angry", Sentiment.NEGATIVE),
        ("What time is it", Sentiment.NEUTRAL),
        ("Great but awful", Sentiment.NEUTRAL),
    ],
)
def test_sentiment_from_user_messages(make_messages, text, expected):
    messages = make_messages([("user", text), ("ai", "Noted")])
    assert metrics.analyze_sentiment(messages) == expected


def test_sentiment_ignores_ai_messages(make_messages):
    messages = make_messages(
        [("user", "I hate waiting"), ("ai", "Great, wonderful, perfect, awesome!")]
    )
    assert metrics.analyze_sentiment(messages) == Sentiment.NEGATIVE


def test_sentiment_sums_across_messages(make_messages):
    messages = make_messages(
        [("user", "bad"), ("user", "thank you, great, perfect"), ("user", "worst")]
    )
    assert metrics.analyze_sentiment(messages) == Sentiment.POSITIVE


def test_empathy_without_phrases(order_conversation):
    assert metrics.analyze_empathy(order_conversation) == 50


def test_empathy_caps_bonus(make_messages):
    messages = make_messages(
        [
            ("ai", "I understand and I appreciate it, sorry."),
            ("ai", "Unfortunately yes. Thank you! Glad to help, happy to."),
        ]
    )
    assert metrics.analyze_empathy(messages) == 100


def test_response_time_placeholder(make_messages):
    assert metrics.analyze_response_time(make_messages([("ai", "Hi")])) == 100
    assert (
        metrics.analyze_response_time(make_messages([("user", "a"), ("ai", "b")]))
        == 85
    )


def test_resolution_detected_in_ai_message(make_messages):
    messages = make_messages([("user", "Fixed?"), ("ai", "Your refund was processed.")])
    assert metrics.analyze_resolution(messages) is True


def test_resolution_ignores_user_messages(make_messages):
    messages = make_messages([("user", "It is resolved"), ("ai", "Noted")])
    assert metrics.analyze_resolution(messages) is False


@pytest.mark.parametrize(
    "text",
    ["Let me transfer you", "This needs level 2 support", "I'll ESCALATE this"],
)
def test_escalation_detected(make_messages, text):
    assert metrics.analyze_escalation(make_messages([("ai", text)])) is True


def test_escalation_ignores_user_messages(make_messages):
    messages = make_messages([("user", "Get me a manager"), ("ai", "Okay")])
    assert metrics.analyze_escalation(messages) is False


def test_fallback_frequency_sums_across_messages(make_messages):
    messages = make_messages(
        [
            ("ai", "I don't know, I'm not aware of that and I am unable to help"),
            ("ai", "Not sure."),
            ("user", "I don't know either"),
        ]
    )
    assert metrics.analyze_fallback_frequency(messages) == 4


def test_overall_score_adjustments():
    base = dict(
        clarity_score=80,
        relevance_score=80,
        accuracy_score=80,
        completeness_score=80,
        empathy_score=80,
        response_time_avg=80,
    )
    assert (
        metrics.calculate_overall_score(
            **base, resolution_rate=False, escalation_needed=False
        )
        == 80
    )
    assert (
        metrics.calculate_overall_score(
            **base, resolution_rate=True, escalation_needed=False
        )
        == 85
    )
    assert (
        metrics.calculate_overall_score(
            **base, resolution_rate=True, escalation_needed=True
        )
        == 75
    )


def test_overall_score_is_clamped():
    top = dict.fromkeys(
        [
            "clarity_score",
            "relevance_score",
            "accuracy_score",
            "completeness_score",
            "empathy_score",
            "response_time_avg",
        ],
        100,
    )
    bottom = dict.fromkeys(top, 0)
    assert (
        metrics.calculate_overall_score(
            **top, resolution_rate=True, escalation_needed=False
        )
        == 100
    )
    assert (
        metrics.calculate_overall_score(
            **bottom, resolution_rate=False, escalation_needed=True
        )
        == 0
    )
