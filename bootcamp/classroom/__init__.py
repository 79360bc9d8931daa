"""
Bootcamp Classroom - Runtime components for loading lessons and tracking progress.

This module provides:
- InMemoryCatalog / YamlCatalog: Lesson catalog providers
- SqliteProgressStore / InMemoryProgressStore: Progress persistence
- NavigationScheduler: Deferred auto-advance
- ProgressController: Lesson page state machine
"""

from .catalog import (
    CatalogProvider,
    InMemoryCatalog,
    YamlCatalog,
)

from .progress import (
    ProgressStore,
    SqliteProgressStore,
    InMemoryProgressStore,
    aggregate_stats,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

from .scheduler import NavigationScheduler

from .controller import (
    ProgressController,
    PageState,
    NavigateToLesson,
    UnlockFinalCode,
    NextAction,
    lesson_path,
    DEFAULT_ADVANCE_DELAY,
)

__all__ = [
    # Catalog
    "CatalogProvider",
    "InMemoryCatalog",
    "YamlCatalog",
    # Progress
    "ProgressStore",
    "SqliteProgressStore",
    "InMemoryProgressStore",
    "aggregate_stats",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    # Scheduler
    "NavigationScheduler",
    # Controller
    "ProgressController",
    "PageState",
    "NavigateToLesson",
    "UnlockFinalCode",
    "NextAction",
    "lesson_path",
    "DEFAULT_ADVANCE_DELAY",
]
