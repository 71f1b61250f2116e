"""
Application constants - storage keys, defaults and canned messages
"""

# ============================================================================
# STORAGE KEYS
# ============================================================================

KEY_STATE_VERSION = "dz:stateVersion"
KEY_PROFILE = "dz:profile"
KEY_PLAN_CACHE = "dz:planCache"
KEY_HABITS = "dz:habits"
KEY_GOALS = "dz:goals"
KEY_HABIT_LOGS = "dz:habitLogs"
KEY_AI_LIMITS = "dz:aiLimits"
KEY_NOTIFICATIONS = "dz:notifications"

# Legacy per-day status maps: dz:logs:<YYYY-MM-DD> -> {habit_id: "yes"|"no"|"none"}
LEGACY_DAY_LOG_PREFIX = "dz:logs:"

STATE_VERSION = "2"

# ============================================================================
# HABITS & LOGS
# ============================================================================

DEFAULT_HABIT_ICON = "meditation"
DEFAULT_TARGET_PER_WEEK = 5
MIN_TARGET_PER_WEEK = 1
MAX_TARGET_PER_WEEK = 7

MOOD_GREAT = "great"
MOOD_OK = "ok"
MOOD_HARD = "hard"
MOOD_SKIP = "skip"
MOODS = (MOOD_GREAT, MOOD_OK, MOOD_HARD, MOOD_SKIP)

DAY_ID_FORMAT = "%Y-%m-%d"
TIME_PATTERN = r"([01][0-9]|2[0-3]):[0-5][0-9]"

# ============================================================================
# DAY BOUNDARIES
# ============================================================================

DEFAULT_DAILY_RESET_HOUR = 20
RESET_POLICY_MIDNIGHT = "midnight"
RESET_POLICY_RESET_HOUR = "reset_hour"

# ============================================================================
# PLANS
# ============================================================================

PLAN_FREE = "free"
PLAN_TRIAL = "trial"
PLAN_PREMIUM = "premium"
PLAN_LIFETIME = "lifetime"
PLANS = (PLAN_FREE, PLAN_TRIAL, PLAN_PREMIUM, PLAN_LIFETIME)
PREMIUM_PLANS = frozenset({PLAN_PREMIUM, PLAN_LIFETIME, PLAN_TRIAL})

FREE_MAX_HABITS = 1
FREE_MAX_GOALS = 1
FREE_AI_PER_DAY = 1
PREMIUM_AI_PER_DAY = 3

# ============================================================================
# COACH
# ============================================================================

COACH_WORD_LIMIT = 150
COACH_MAX_TOKENS = 300
COACH_TEMPERATURE = 0.7
COACH_OFF_TOPIC_PATTERN = r"(^|\b)(crypto|stocks?|politics?|celebrity|gossip)\b"

COACH_LIMIT_REACHED_MESSAGE = "Daily AI limit reached. Try again after your reset."
COACH_OFF_TOPIC_MESSAGE = (
    "I can only help with habits, goals, routines, and reflection. "
    "Try asking about your plan for today."
)
COACH_APOLOGY_MESSAGE = "Hmm, I had trouble answering. Please try again."

# ============================================================================
# NOTIFICATIONS
# ============================================================================

DEFAULT_REMINDER_TIME = "09:00"
DEFAULT_CHECK_IN_TIME = "08:00"
DEFAULT_REFLECT_TIME = "20:00"
