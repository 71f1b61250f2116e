"""
Dependency injection for shared clients, the store and the service graph
"""
from functools import lru_cache
import logging
from typing import Optional

from openai import OpenAI
from supabase import create_client, Client

from dayzero.core.config import settings
from dayzero.services.coach import CoachService, OpenAICoachBackend
from dayzero.services.entitlements import EntitlementService, SupabasePlanSource
from dayzero.services.habits import HabitRepository, HabitService
from dayzero.services.logs import LogRepository, LogService
from dayzero.services.notifications import NotificationService, ReminderScheduler
from dayzero.services.profile import ProfileService
from dayzero.storage import JSONFileStore, KeyValueStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_store() -> KeyValueStore:
    """Get the durable key-value store"""
    return JSONFileStore(settings.STORE_PATH)


@lru_cache()
def get_supabase_client() -> Optional[Client]:
    """Get Supabase client instance, or None when not configured"""
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        logger.info("Supabase not configured - remote plan refresh disabled")
        return None
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache()
def get_openai_client() -> Optional[OpenAI]:
    """Get OpenAI client instance, or None when no API key is set"""
    if not settings.OPENAI_API_KEY:
        logger.info("OPENAI_API_KEY not set - coach answers disabled")
        return None
    return OpenAI(api_key=settings.OPENAI_API_KEY)


@lru_cache()
def get_profile_service() -> ProfileService:
    return ProfileService(get_store())


@lru_cache()
def get_habit_repository() -> HabitRepository:
    return HabitRepository(get_store())


@lru_cache()
def get_reminder_scheduler() -> ReminderScheduler:
    # Delivery channel is wired by the host app; without one reminders are only logged
    return ReminderScheduler(NotificationService())


@lru_cache()
def get_habit_service() -> HabitService:
    return HabitService(get_habit_repository(), get_profile_service(), reminders=get_reminder_scheduler())


@lru_cache()
def get_log_service() -> LogService:
    return LogService(LogRepository(get_store()), get_habit_repository(), get_profile_service())


@lru_cache()
def get_entitlement_service() -> EntitlementService:
    client = get_supabase_client()
    plan_source = SupabasePlanSource(client) if client is not None else None
    return EntitlementService(get_store(), get_profile_service(), get_habit_repository(), plan_source=plan_source)


@lru_cache()
def get_coach_service() -> CoachService:
    client = get_openai_client()
    backend = OpenAICoachBackend(client) if client is not None else None
    return CoachService(get_entitlement_service(), backend)
