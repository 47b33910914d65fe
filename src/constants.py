"""Application constants - centralized configuration values."""

# =============================================================================
# Recommendation scoring
# =============================================================================
WEIGHT_GENRE_MATCH = 0.4
WEIGHT_RATING = 0.3
WEIGHT_RECENCY = 0.2
WEIGHT_POPULARITY = 0.1

NEUTRAL_FACTOR = 0.5  # Used when a show has no rating
DEFAULT_AVERAGE_RATING = 3.0  # Scale midpoint when the user rated nothing
DEFAULT_RECENCY_SCORE = 0.5  # Unknown recency
RECENCY_WINDOW_DAYS = 30
RATING_SCALE_MAX = 5  # Divisor for the rating factor
POPULARITY_SCALE_MAX = 100  # Divisor for the popularity factor
METADATA_TOP_GENRES = 5

# =============================================================================
# Limits
# =============================================================================
DEFAULT_RECOMMENDATION_LIMIT = 10
BASIC_RECOMMENDATION_LIMIT = 10
BASIC_TOP_GENRES = 3
BASIC_DEFAULT_GENRES = ("Action", "Adventure", "Fantasy")

# =============================================================================
# Rating
# =============================================================================
RATING_MIN = 1
RATING_MAX = 5
ANILIST_SCORE_TO_STARS = 20  # averageScore is 0-100

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_EXTERNAL = 15.0
HTTPX_TIMEOUT = 10.0
DATA_ACCESS_TIMEOUT = 10.0

# =============================================================================
# External API URLs
# =============================================================================
ANILIST_API_URL = "https://graphql.anilist.co"
ANILIST_PAGE_SIZE = 50
