"""
Coach module - AI habit coach
"""
from .backend import OpenAICoachBackend
from .service import CoachService, clip_words, is_off_topic

__all__ = ["OpenAICoachBackend", "CoachService", "clip_words", "is_off_topic"]
