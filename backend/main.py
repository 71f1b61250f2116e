"""
FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI

from dayzero import __version__
from dayzero.core.config import settings
from dayzero.core.dependencies import (
    get_entitlement_service,
    get_habit_service,
    get_log_service,
    get_profile_service,
    get_reminder_scheduler,
)
from dayzero.routes import coach, habits, health, logs, profile
from dayzero.services.bootstrap import hydrate_app

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)
logging.getLogger('apscheduler.scheduler').setLevel(logging.WARNING)
logging.getLogger('apscheduler.executors').setLevel(logging.WARNING)
logging.getLogger('apscheduler.executors.default').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup/shutdown events
    """
    reminders = get_reminder_scheduler()

    # Startup
    try:
        hydrate_app(
            get_profile_service(),
            get_entitlement_service(),
            get_habit_service(),
            get_log_service(),
            reminders=reminders,
            user_id=settings.USER_ID or None
        )
        reminders.start()
        logger.info("✓ Local state hydrated and reminder scheduler started")
    except Exception as e:
        logger.warning(f"Startup hydration incomplete: {e}")

    yield

    # Shutdown
    try:
        reminders.stop()
    except Exception as e:
        logger.warning(f"Error stopping scheduler: {e}")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="Day Zero API",
    version=__version__,
    lifespan=lifespan
)

# Register routes
app.include_router(health.router)
app.include_router(habits.router)
app.include_router(logs.router)
app.include_router(coach.router)
app.include_router(profile.router)
