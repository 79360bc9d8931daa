"""
Sidebar renderer - Lesson list and progress tracker.

Provides:
- Status indicators per lesson
- Sidebar items with links
- Progress bar HTML
"""

from dataclasses import dataclass

from bootcamp.classroom import lesson_path
from bootcamp.schemas import Lesson, LessonProgress, ProgressStats


@dataclass
class SidebarItem:
    """Lesson with sidebar display metadata."""
    lesson: Lesson
    indicator: str
    is_current: bool
    completed: bool
    path: str


def get_status_indicator(lesson_id: str, current_id: str, completed_ids: set[str]) -> str:
    """
    Get status indicator for sidebar display.

    Returns:
        ✓ for completed
        → for current
        ○ for not yet completed
    """
    if lesson_id in completed_ids:
        return "✓"
    elif lesson_id == current_id:
        return "→"
    else:
        return "○"


def build_sidebar_items(
    lessons: list[Lesson],
    current_id: str,
    progress: list[LessonProgress],
    instructor: str,
    level: str,
) -> list[SidebarItem]:
    """Annotate the level's lessons for the sidebar, in lesson order."""
    completed_ids = {p.lesson_id for p in progress if p.completed}
    return [
        SidebarItem(
            lesson=lesson,
            indicator=get_status_indicator(lesson.id, current_id, completed_ids),
            is_current=lesson.id == current_id,
            completed=lesson.id in completed_ids,
            path=lesson_path(instructor, level, lesson.id),
        )
        for lesson in lessons
    ]


def render_progress_tracker(stats: ProgressStats) -> str:
    """Render the lesson progress bar."""
    return f"""
    <div class="progress-tracker">
        <div class="progress-label">
            <span>Progress</span>
            <span>{stats.completed}/{stats.total} lessons ({stats.percentage}%)</span>
        </div>
        <div class="progress-bar" style="background:#1f2937;border-radius:6px;height:10px;">
            <div class="progress-fill" style="background:#10b981;border-radius:6px;height:10px;width:{stats.percentage}%;"></div>
        </div>
    </div>
    """
