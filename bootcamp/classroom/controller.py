"""
ProgressController - Lesson page state, quiz completion and next-step decisions.

Provides:
- Lesson and progress loading for one (instructor, level, lesson) page
- Page state machine (loading, ready, quiz, level complete, unlocked)
- Quiz completion with in-memory progress upsert
- Next action: go to the next lesson or unlock the final code
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Union

from bootcamp.schemas import Lesson, LessonProgress, ProgressStats, compute_stats

from .catalog import CatalogProvider
from .progress import ProgressStore
from .scheduler import NavigationScheduler


logger = logging.getLogger(__name__)

DEFAULT_ADVANCE_DELAY = 1.0


class PageState(str, Enum):
    """Lesson page state for UI display."""
    LOADING = "loading"                     # Lesson not (yet) found
    READY = "ready"                         # Video and quiz button shown
    QUIZ_ACTIVE = "quiz_active"             # Quiz being taken
    LEVEL_COMPLETE = "level_complete"       # Last lesson of level done
    BOOTCAMP_UNLOCKED = "bootcamp_unlocked" # Final code screen, terminal


def lesson_path(instructor: str, level: str, lesson_id: str) -> str:
    """URL path of a lesson page."""
    return f"/instructor/{instructor}/{level}/{lesson_id}"


@dataclass(frozen=True)
class NavigateToLesson:
    """Move to another lesson of the same level after a short delay."""
    instructor: str
    level: str
    lesson: Lesson
    delay_seconds: float = DEFAULT_ADVANCE_DELAY

    @property
    def path(self) -> str:
        return lesson_path(self.instructor, self.level, self.lesson.id)


@dataclass(frozen=True)
class UnlockFinalCode:
    """Swap the page for the final code unlock screen."""
    instructor: str


NextAction = Optional[Union[NavigateToLesson, UnlockFinalCode]]


class ProgressController:
    """
    Drive one lesson page.

    Combines a CatalogProvider (content) with a ProgressStore (user state).
    Both are injected so tests can substitute in-memory fakes.
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        store: ProgressStore,
        scheduler: Optional[NavigationScheduler] = None,
        advance_delay: float = DEFAULT_ADVANCE_DELAY,
    ):
        """
        Initialize controller.

        Args:
            catalog: Catalog used to look up lessons
            store: Store used to read and write progress
            scheduler: Runs deferred navigation (default: new NavigationScheduler)
            advance_delay: Seconds to wait before moving to the next lesson
        """
        self.catalog = catalog
        self.store = store
        self.scheduler = scheduler or NavigationScheduler()
        self.advance_delay = advance_delay

        self.state = PageState.LOADING
        self.instructor: Optional[str] = None
        self.level: Optional[str] = None
        self.lesson: Optional[Lesson] = None
        self.lessons: list[Lesson] = []
        self.progress: list[LessonProgress] = []
        self.bootcamp_completed = False

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_lesson(self, instructor: str, level: str, lesson_id: str) -> Optional[Lesson]:
        """
        Load the lesson and the full ordered lesson list for its level.

        Returns None when the lesson is not in the catalog; the page then
        stays in the loading state.
        """
        lesson = self.catalog.get_lesson(instructor, level, lesson_id)
        if lesson is None:
            logger.warning(f"Lesson not found: {lesson_path(instructor, level, lesson_id)}")
            return None

        self.lesson = lesson
        self.lessons = self.catalog.get_lessons(instructor, level)
        return lesson

    def load_progress(self, instructor: str, level: str) -> list[LessonProgress]:
        """Read saved progress for a level; empty list if none saved."""
        saved = self.store.load(instructor, level)
        self.progress = list(saved.lessons) if saved else []
        return self.progress

    def open(self, instructor: str, level: str, lesson_id: str) -> PageState:
        """
        Page entry: load lesson, progress and bootcamp completion.

        Returns the resulting page state (LOADING if the lesson is missing).
        """
        self.scheduler.cancel()
        self.instructor = instructor
        self.level = level
        self.lesson = None
        self.lessons = []
        self.state = PageState.LOADING

        lesson = self.load_lesson(instructor, level, lesson_id)
        self.load_progress(instructor, level)
        self.bootcamp_completed = self.store.is_completed(instructor)

        if lesson is not None:
            self.state = PageState.READY
        return self.state

    # -------------------------------------------------------------------------
    # Quiz
    # -------------------------------------------------------------------------

    def start_quiz(self) -> bool:
        """
        Enter the quiz.

        Returns True if the quiz was started, False if unavailable.
        """
        if self.state not in (PageState.READY, PageState.LEVEL_COMPLETE):
            return False
        if self.lesson is None or not self.lesson.quiz:
            return False
        self.state = PageState.QUIZ_ACTIVE
        return True

    def complete_quiz(self, lesson_id: str, score: float) -> tuple[list[LessonProgress], NextAction]:
        """
        Record a finished quiz and decide what happens next.

        Args:
            lesson_id: ID of the lesson whose quiz was completed
            score: Quiz score (0.0-1.0)

        Returns:
            Tuple of (updated progress list, next action). The next action is
            NavigateToLesson, UnlockFinalCode, or None when the level is done
            but the bootcamp is not.

        Raises:
            RuntimeError: If no lesson is loaded or the bootcamp is already unlocked
        """
        if self.state == PageState.LOADING:
            raise RuntimeError("Cannot complete a quiz before the lesson has loaded")
        if self.state == PageState.BOOTCAMP_UNLOCKED:
            raise RuntimeError("Bootcamp already unlocked")

        self.store.save(self.instructor, self.level, lesson_id, True, score)
        self.progress = self._upsert_progress(lesson_id, score)

        position = next(
            (i for i, lesson in enumerate(self.lessons) if lesson.id == lesson_id), -1
        )
        next_index = position + 1

        action: NextAction
        if next_index < len(self.lessons):
            action = NavigateToLesson(
                instructor=self.instructor,
                level=self.level,
                lesson=self.lessons[next_index],
                delay_seconds=self.advance_delay,
            )
            self.state = PageState.READY
            logger.info(f"Lesson {lesson_id} complete, next: {action.path}")
        elif self.store.is_completed(self.instructor):
            action = UnlockFinalCode(instructor=self.instructor)
            self.bootcamp_completed = True
            self.state = PageState.BOOTCAMP_UNLOCKED
            logger.info(f"Bootcamp complete for {self.instructor}, unlocking final code")
        else:
            action = None
            self.state = PageState.LEVEL_COMPLETE
            logger.info(f"Level {self.instructor}/{self.level} complete")

        return self.progress, action

    def _upsert_progress(self, lesson_id: str, score: float) -> list[LessonProgress]:
        """Update the record in place or append a new one (insertion order)."""
        updated = []
        found = False
        for record in self.progress:
            if record.lesson_id == lesson_id:
                record = record.model_copy(update={"completed": True, "quiz_score": score})
                found = True
            updated.append(record)
        if not found:
            updated.append(LessonProgress(
                lesson_id=lesson_id,
                completed=True,
                quiz_score=score,
                timestamp=datetime.now(),
            ))
        return updated

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def schedule_navigation(
        self,
        action: NavigateToLesson,
        callback: Callable[[NavigateToLesson], None],
    ):
        """
        Run callback(action) once action.delay_seconds have passed.

        For hosts with their own event loop. The Streamlit app cannot rerun
        from a timer thread, so it pauses inside the script run instead.
        """
        self.scheduler.schedule(action.delay_seconds, lambda: callback(action))

    def close(self):
        """Page teardown: drop any pending navigation."""
        self.scheduler.cancel()

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    @property
    def completed_lesson_ids(self) -> set[str]:
        return {p.lesson_id for p in self.progress if p.completed}

    @property
    def stats(self) -> ProgressStats:
        """Completion stats for the current level."""
        completed = sum(1 for lesson in self.lessons if lesson.id in self.completed_lesson_ids)
        return compute_stats(completed, len(self.lessons))

    def get_lesson_position(self, lesson_id: str) -> tuple[int, int]:
        """
        Get lesson position as (current, total).

        Returns (0, total) if lesson not found.
        """
        for i, lesson in enumerate(self.lessons):
            if lesson.id == lesson_id:
                return (i + 1, len(self.lessons))
        return (0, len(self.lessons))
