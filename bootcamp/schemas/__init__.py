"""
Bootcamp Schemas - Pydantic models for the lesson page.

This module exports all schema classes for:
- Lesson: quiz questions, lessons, levels, instructors, catalog
- Progress: lesson progress records and completion statistics
"""

# Lesson schemas
from .lesson import (
    QuizQuestion,
    Lesson,
    Level,
    Instructor,
    Catalog,
)

# Progress schemas
from .progress import (
    LessonProgress,
    LevelProgress,
    ProgressStats,
    compute_stats,
)

__all__ = [
    # Lesson
    'QuizQuestion',
    'Lesson',
    'Level',
    'Instructor',
    'Catalog',
    # Progress
    'LessonProgress',
    'LevelProgress',
    'ProgressStats',
    'compute_stats',
]
