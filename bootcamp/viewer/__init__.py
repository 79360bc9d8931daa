"""
Bootcamp Viewer - Rendering components for the lesson page.

This module provides:
- Video embedding
- Quiz display and scoring
- Sidebar lesson list and progress tracker
- Final code unlock screen
"""

from .video import render_video

from .quiz import (
    get_quiz_css,
    count_correct,
    grade_quiz,
    calculate_quiz_score,
    render_quiz_question,
    render_quiz_score,
)

from .sidebar import (
    SidebarItem,
    get_status_indicator,
    build_sidebar_items,
    render_progress_tracker,
)

from .unlock import (
    generate_final_code,
    verify_final_code,
    render_final_unlock,
)

__all__ = [
    # Video
    "render_video",
    # Quiz
    "get_quiz_css",
    "count_correct",
    "grade_quiz",
    "calculate_quiz_score",
    "render_quiz_question",
    "render_quiz_score",
    # Sidebar
    "SidebarItem",
    "get_status_indicator",
    "build_sidebar_items",
    "render_progress_tracker",
    # Unlock
    "generate_final_code",
    "verify_final_code",
    "render_final_unlock",
]
