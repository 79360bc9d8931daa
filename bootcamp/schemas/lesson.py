"""
Lesson catalog schemas for the bootcamp.

Defines Pydantic models for catalog content including:
- Quiz questions
- Lessons (video + quiz)
- Levels and instructors
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional


class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    options: list[str] = Field(..., min_length=2)
    answer: int = Field(..., ge=0)  # index into options

    @model_validator(mode="after")
    def check_answer_index(self):
        if self.answer >= len(self.options):
            raise ValueError(
                f"answer index {self.answer} out of range for {len(self.options)} options"
            )
        return self


class Lesson(BaseModel):
    """A single video lesson. Immutable once loaded."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    video_url: str
    quiz: list[QuizQuestion] = []


class Level(BaseModel):
    id: str
    title: Optional[str] = None
    lessons: list[Lesson] = []

    @model_validator(mode="after")
    def check_unique_lesson_ids(self):
        seen = set()
        for lesson in self.lessons:
            if lesson.id in seen:
                raise ValueError(f"Duplicate lesson id in level {self.id}: {lesson.id}")
            seen.add(lesson.id)
        return self


class Instructor(BaseModel):
    id: str
    name: str
    levels: list[Level] = []

    def get_level(self, level_id: str) -> Optional[Level]:
        for level in self.levels:
            if level.id == level_id:
                return level
        return None


class Catalog(BaseModel):
    instructors: list[Instructor] = []

    def get_instructor(self, instructor_id: str) -> Optional[Instructor]:
        for instructor in self.instructors:
            if instructor.id == instructor_id:
                return instructor
        return None
