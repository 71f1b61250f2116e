"""
Habits module - habit entity lifecycle
"""
from .repository import HabitRepository
from .service import HabitService, clamp_target, normalize_target_times

__all__ = ["HabitRepository", "HabitService", "clamp_target", "normalize_target_times"]
