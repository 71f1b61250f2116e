"""
Remote plan source - reads the signed-in user's plan tier from Supabase
"""
import logging
from typing import Optional

from dayzero.core.constants import PLAN_FREE
from dayzero.core.exceptions import RemoteUnavailableError

logger = logging.getLogger(__name__)


class SupabasePlanSource:
    """
    Plan lookup against the `users` table

    A missing row means the user never upgraded, so it reads as free.
    """

    def __init__(self, client, table: str = "users"):
        self.client = client
        self.table = table

    def fetch_plan(self, user_id: str) -> str:
        """
        Raises:
            RemoteUnavailableError: If the query fails
        """
        try:
            result = self.client.table(self.table).select("plan").eq("id", user_id).execute()
        except Exception as e:
            logger.error(f"Remote plan fetch failed for {user_id}: {e}")
            raise RemoteUnavailableError(f"Failed to fetch plan: {e}")
        row: Optional[dict] = result.data[0] if result.data else None
        return (row or {}).get("plan") or PLAN_FREE
