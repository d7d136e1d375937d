"""Constants and enumerations for chat transcript scoring."""

from enum import StrEnum
from typing import Final


# Backend Configuration
REST_API_PATH: Final[str] = "/rest/v1"
MESSAGES_TABLE: Final[str] = "messages"
CONVERSATIONS_TABLE: Final[str] = "conversations"
ANALYSES_TABLE: Final[str] = "conversation_analyses"
ANALYZE_ENDPOINT: Final[str] = "/analyze-conversation"

# Default Values
DEFAULT_ANALYSIS_OUTPUT: Final[str] = "analysis.json"
DEFAULT_AGGREGATE_OUTPUT: Final[str] = "analyses.csv"
DEFAULT_STORE_MAX_RETRIES: Final[int] = 3
DEFAULT_STORE_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_STORE_RATE_LIMIT: Final[int] = 10
DEFAULT_SERVER_HOST: Final[str] = "127.0.0.1"
DEFAULT_SERVER_PORT: Final[int] = 8000

# Score Bounds
MIN_SCORE: Final[float] = 0.0
MAX_SCORE: Final[float] = 100.0

# Base Scores
CLARITY_BASE: Final[int] = 85
RELEVANCE_BASE: Final[int] = 90
ACCURACY_BASE: Final[int] = 80
COMPLETENESS_BASE: Final[int] = 85
EMPATHY_BASE: Final[int] = 50

# Clarity Rules
CLARITY_SHORT_LENGTH: Final[int] = 20
CLARITY_LONG_LENGTH: Final[int] = 1000
CLARITY_QUESTIONLESS_LENGTH: Final[int] = 100
CLARITY_SHORT_PENALTY: Final[int] = 5
CLARITY_LONG_PENALTY: Final[int] = 3
CLARITY_QUESTIONLESS_PENALTY: Final[int] = 5

# Relevance Rules
RELEVANCE_MIN_TOKEN_LENGTH: Final[int] = 3
RELEVANCE_OFF_TOPIC_PENALTY: Final[int] = 15

# Accuracy Rules
ACCURACY_HEDGE_PENALTY: Final[int] = 5

# Completeness Rules
COMPLETENESS_SHORT_LENGTH: Final[int] = 30
COMPLETENESS_SHORT_PENALTY: Final[int] = 5
COMPLETENESS_INCOMPLETE_PENALTY: Final[int] = 10
ELLIPSIS: Final[str] = "..."
QUESTION_MARK: Final[str] = "?"

# Empathy Rules
EMPATHY_PHRASE_BONUS: Final[int] = 15
EMPATHY_MAX_BONUS: Final[int] = 50

# Response Time Placeholder
RESPONSE_TIME_SINGLE_MESSAGE: Final[int] = 100
RESPONSE_TIME_DEFAULT: Final[int] = 85

# Overall Score Adjustments
RESOLUTION_BONUS: Final[int] = 5
ESCALATION_PENALTY: Final[int] = 10

# Phrase Lists
HEDGING_PHRASES: Final[tuple[str, ...]] = (
    "i think",
    "probably",
    "maybe",
    "not sure",
    "possibly",
)
POSITIVE_KEYWORDS: Final[tuple[str, ...]] = (
    "great",
    "excellent",
    "thank",
    "happy",
    "love",
    "awesome",
    "perfect",
    "wonderful",
)
NEGATIVE_KEYWORDS: Final[tuple[str, ...]] = (
    "bad",
    "terrible",
    "awful",
    "angry",
    "frustrated",
    "disappointed",
    "hate",
    "worst",
)
EMPATHY_PHRASES: Final[tuple[str, ...]] = (
    "i understand",
    "i appreciate",
    "sorry",
    "unfortunately",
    "thank you",
    "glad to help",
    "happy to",
)
RESOLUTION_KEYWORDS: Final[tuple[str, ...]] = (
    "resolved",
    "fixed",
    "solved",
    "completed",
    "done",
    "shipped",
    "processed",
)
ESCALATION_KEYWORDS: Final[tuple[str, ...]] = (
    "escalate",
    "manager",
    "supervisor",
    "specialist",
    "level 2",
    "transfer",
)
FALLBACK_PHRASES: Final[tuple[str, ...]] = (
    "i don't know",
    "not sure",
    "cannot help",
    "unable to",
    "i'm not aware",
)

# JSON Serialization
JSON_INDENT: Final[int] = 2

# Empty Values
EMPTY_STRING: Final[str] = ""

# Numeric Constants
EXIT_CODE_ERROR: Final[int] = 1

# CORS
CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


class MessageSender(StrEnum):
    """Message sender roles."""

    USER = "user"
    AI = "ai"


class Sentiment(StrEnum):
    """Overall customer sentiment labels."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ScoreBand(StrEnum):
    """Display bands for bounded scores."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class MessageKey(StrEnum):
    """Transcript message dictionary keys."""

    SENDER = "sender"
    CONTENT = "content"
    MESSAGE = "message"


class ConversationKey(StrEnum):
    """Conversation record keys."""

    ID = "id"
    TITLE = "title"
    USER_ID = "user_id"
    CREATED_AT = "created_at"
    ANALYZED_AT = "analyzed_at"
    CONVERSATION_ID = "conversation_id"


class AnalysisKey(StrEnum):
    """Analysis record keys."""

    CONVERSATION_ID = "conversation_id"
    CLARITY_SCORE = "clarity_score"
    RELEVANCE_SCORE = "relevance_score"
    ACCURACY_SCORE = "accuracy_score"
    COMPLETENESS_SCORE = "completeness_score"
    SENTIMENT = "sentiment"
    EMPATHY_SCORE = "empathy_score"
    RESPONSE_TIME_AVG = "response_time_avg"
    RESOLUTION_RATE = "resolution_rate"
    ESCALATION_NEEDED = "escalation_needed"
    FALLBACK_FREQUENCY = "fallback_frequency"
    OVERALL_SATISFACTION_SCORE = "overall_satisfaction_score"


class SummaryStatisticKey(StrEnum):
    """Aggregate summary field names."""

    TOTAL_ANALYZED = "total_analyzed"
    AVERAGE_PREFIX = "avg_"
    SENTIMENT_COUNTS = "sentiment_counts"
    RESOLUTION_PCT = "resolution_pct"
    ESCALATION_PCT = "escalation_pct"
    TOTAL_FALLBACKS = "total_fallbacks"


class ErrorMessage(StrEnum):
    """User-facing error messages."""

    UNAUTHORIZED = "Unauthorized"
    NO_MESSAGES = "No messages found for this conversation"
    MISSING_CONFIG = "Missing Supabase configuration"
    MISSING_CONVERSATION_ID = "conversation_id is required"
    MISSING_TITLE = "Please enter a conversation title"
    MISSING_MESSAGES = "Please load messages first"
    NOT_A_LIST = "JSON must be an array of messages"
    UNKNOWN = "Unknown error"


class LogMessage(StrEnum):
    """Log message templates."""

    SCORING_HEADER = "=== CONVERSATION SCORING ==="
    SCORING_MESSAGES = "Scoring {} messages ({} from AI)"
    SCORED = "Overall satisfaction score: {:.1f}/100"
    FETCHING_MESSAGES = "Fetching messages for conversation {}..."
    FETCHED_MESSAGES = "Fetched {} messages for conversation {}"
    UPSERTED_ANALYSIS = "Stored analysis for conversation {}"
    MARKED_ANALYZED = "Marked conversation {} analyzed at {}"
    UPLOADED_CONVERSATION = "Uploaded conversation {} with {} messages"
    SKIPPING_EMPTY = "Skipping conversation {}: no messages"
    PENDING_FOUND = "Found {} conversations awaiting analysis"
    LOADED_TRANSCRIPT = "Loaded {} messages from {}"
    SAVED_ANALYSIS = "Saved analysis to {}"
    SAVED_CSV = "Saved {} analyses to {}"
    SAVED_REPORT = "Saved report to {}"
    ERROR_OCCURRED = "Error occurred: {}"


class CliHelp(StrEnum):
    """CLI help messages."""

    APP = "Chat transcript quality scoring tool"
    TRANSCRIPT = "Path to a JSON array of {sender, content} messages."
    ANALYSIS_OUTPUT = "Output file path for the analysis JSON."
    CSV_OUTPUT = "Optional CSV output path for the analysis."
    MARKDOWN_OUTPUT = "Optional markdown scorecard output path."
    PDF_OUTPUT = "Optional PDF scorecard output path."
    TITLE = "Title for the uploaded conversation."
    USER_ID = "Owner user ID for the conversation."
    CONVERSATION_ID = "ID of the stored conversation to analyze."
    ANALYSES_DIR = "Directory of analysis JSON files."
    AGGREGATE_OUTPUT = "Output CSV path for the aggregated analyses."
    SUPABASE_URL = "Backend base URL. Can also be set via SUPABASE_URL."
    SUPABASE_KEY = (
        "Backend service role key. Can also be set via SUPABASE_SERVICE_ROLE_KEY."
    )
    HOST = "Interface to bind the API server to."
    PORT = "Port to bind the API server to."
