# Trident Shared Module
# Common functions used across all Trident services

from .config import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    SENTIMENT_TIMEOUT_SECONDS,
    SENTIMENT_MAX_TOKENS,
    TRENDS_DEFAULT_DAYS,
    TRENDS_MAX_DAYS,
    SENTIMENTS
)

from .helpers import (
    strip_markdown_json,
    utc_now,
    to_iso_utc,
    round_half_up,
    parse_positive_int,
    configure_logging
)

from .schemas import (
    BusinessType,
    FeedbackCreate,
    FeedbackRespond,
    FeedbackRecord,
    CustomerRecord,
    InquiryCreate,
    InquiryStatusUpdate,
    InquiryRecord
)

from .sentiment import (
    SentimentResult,
    SentimentClassifier,
    ClaudeSentimentClassifier,
    FALLBACK_RESULT,
    normalize_result
)

from .store import (
    FeedbackStore,
    InquiryStore
)

from .analytics import (
    sentiment_stats,
    sentiment_trends,
    response_stats
)

from .export import feedback_to_csv
