"""
Pydantic models for the AI coach
"""
from pydantic import BaseModel, Field


class CoachRequest(BaseModel):
    """Request model for asking the coach"""
    prompt: str = Field(..., min_length=1, max_length=2000, description="Question for the coach")


class CoachAnswer(BaseModel):
    """Coach reply plus the quota state after answering"""
    answer: str
    answered: bool = Field(..., description="False when the reply is a limit or error message")
    used: int
    max: int
