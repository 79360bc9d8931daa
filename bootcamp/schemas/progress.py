"""
Progress tracking schemas for the bootcamp.

Defines Pydantic models for student progress including:
- Per-lesson completion records
- Saved progress for one (instructor, level)
- Derived completion statistics
"""

import math
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class LessonProgress(BaseModel):
    lesson_id: str
    completed: bool = False
    quiz_score: Optional[float] = None  # 0.0-1.0, None until completed
    timestamp: Optional[datetime] = None


class LevelProgress(BaseModel):
    instructor: str
    level: str
    lessons: list[LessonProgress] = []


class ProgressStats(BaseModel):
    total: int = Field(0, ge=0)
    completed: int = Field(0, ge=0)
    percentage: int = Field(0, ge=0, le=100)


def compute_stats(completed: int, total: int) -> ProgressStats:
    """
    Compute completion statistics.

    Percentage is rounded half-up (12.5 -> 13) and is 0 for an empty level.
    """
    if total <= 0:
        return ProgressStats(total=0, completed=0, percentage=0)
    percentage = math.floor(completed * 100 / total + 0.5)
    return ProgressStats(total=total, completed=completed, percentage=percentage)
