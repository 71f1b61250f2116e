"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Storage
    STORE_PATH: str = os.getenv("DAYZERO_STORE_PATH", "dayzero_store.json")

    # Day boundaries
    DEFAULT_TIMEZONE: str = os.getenv("DAYZERO_DEFAULT_TIMEZONE", "UTC")
    DAILY_RESET_HOUR: int = int(os.getenv("DAYZERO_DAILY_RESET_HOUR", "20"))
    DAY_RESET_POLICY: str = os.getenv("DAYZERO_DAY_RESET_POLICY", "midnight")

    # AI coach
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    COACH_MODEL: str = os.getenv("DAYZERO_COACH_MODEL", "gpt-4o-mini")

    # Remote plan source
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    USER_ID: str = os.getenv("DAYZERO_USER_ID", "")


# Create a global settings instance
settings = Settings()
