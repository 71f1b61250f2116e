"""
Coach backend - text completion through the OpenAI chat API
"""
import logging

from dayzero.core.config import settings
from dayzero.core.constants import COACH_MAX_TOKENS, COACH_TEMPERATURE
from dayzero.core.exceptions import RemoteUnavailableError
from dayzero.utils.prompts import COACH_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class OpenAICoachBackend:
    """Sends a prompt with the habit-coach system prompt and returns the reply text"""

    def __init__(self, client, model: str = None):
        self.client = client
        self.model = model or settings.COACH_MODEL

    def complete(self, prompt: str) -> str:
        """
        Raises:
            RemoteUnavailableError: If the API call fails or returns nothing
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": COACH_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt}
                ],
                temperature=COACH_TEMPERATURE,
                max_tokens=COACH_MAX_TOKENS
            )
            text = (response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.error(f"Coach completion error: {e}")
            raise RemoteUnavailableError(f"Coach backend failed: {e}")
        if not text:
            raise RemoteUnavailableError("Coach backend returned an empty answer")
        return text
