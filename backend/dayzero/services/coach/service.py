"""
Coach Service - quota-gated questions to the AI habit coach
"""
import logging
import re
from typing import Optional

from dayzero.core.constants import (
    COACH_APOLOGY_MESSAGE,
    COACH_LIMIT_REACHED_MESSAGE,
    COACH_OFF_TOPIC_MESSAGE,
    COACH_OFF_TOPIC_PATTERN,
    COACH_WORD_LIMIT,
)
from dayzero.core.exceptions import RemoteUnavailableError, ValidationError
from dayzero.models.coach import CoachAnswer
from dayzero.services.entitlements import EntitlementService

logger = logging.getLogger(__name__)

_OFF_TOPIC_RE = re.compile(COACH_OFF_TOPIC_PATTERN, re.IGNORECASE)


def clip_words(text: str, limit: int = COACH_WORD_LIMIT) -> str:
    """Trim text to at most `limit` words, marking a cut with an ellipsis"""
    words = text.strip().split()
    if len(words) <= limit:
        return text.strip()
    return " ".join(words[:limit]) + "…"


def is_off_topic(prompt: str) -> bool:
    return bool(_OFF_TOPIC_RE.search(prompt))


class CoachService:
    """
    Answers coach questions within the daily allowance

    A question consumes quota only when an answer (including the off-topic
    refusal) is delivered; backend failures return an apology for free.
    """

    def __init__(self, entitlements: EntitlementService, backend=None):
        self.entitlements = entitlements
        self.backend = backend

    def ask(self, prompt: str, tz: Optional[str] = None) -> CoachAnswer:
        """
        Ask the coach a question

        Raises:
            ValidationError: If the prompt is blank
            StorageUnavailableError: If the quota cannot be read or written
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Prompt cannot be empty")
        prompt = prompt.strip()

        access = self.entitlements.can_use_coach(tz)
        if not access.allowed:
            logger.info(f"Coach limit reached ({access.used}/{access.max})")
            return CoachAnswer(answer=COACH_LIMIT_REACHED_MESSAGE, answered=False, used=access.used, max=access.max)

        if is_off_topic(prompt):
            answer = COACH_OFF_TOPIC_MESSAGE
        else:
            try:
                if self.backend is None:
                    raise RemoteUnavailableError("No coach backend configured")
                answer = clip_words(self.backend.complete(prompt))
            except RemoteUnavailableError as e:
                logger.warning(f"Coach unavailable: {e}")
                return CoachAnswer(answer=COACH_APOLOGY_MESSAGE, answered=False, used=access.used, max=access.max)

        quota = self.entitlements.mark_coach_used()
        return CoachAnswer(answer=answer, answered=True, used=quota.used_today, max=access.max)
