"""
Logs module - habit log recording and history
"""
from .repository import LogRepository
from .service import LogService, day_status_index

__all__ = ["LogRepository", "LogService", "day_status_index"]
