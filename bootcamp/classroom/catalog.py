"""
Catalog - Read-only access to instructors, levels and lessons.

Provides:
- CatalogProvider protocol used by the controller and the progress store
- YamlCatalog: catalog loaded from a YAML file (data/catalog.yaml)
- InMemoryCatalog: catalog built from a Catalog object
"""

import logging
from pathlib import Path
from typing import Optional, Protocol

import yaml

from bootcamp.schemas import Catalog, Instructor, Lesson, Level


logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Ordered lessons per (instructor, level). Order defines "next lesson"."""

    def get_instructors(self) -> list[Instructor]:
        ...

    def get_instructor(self, instructor: str) -> Optional[Instructor]:
        ...

    def get_levels(self, instructor: str) -> list[Level]:
        ...

    def get_level(self, instructor: str, level: str) -> Optional[Level]:
        ...

    def get_lessons(self, instructor: str, level: str) -> list[Lesson]:
        ...

    def get_lesson(self, instructor: str, level: str, lesson_id: str) -> Optional[Lesson]:
        ...


class InMemoryCatalog:
    """
    Catalog backed by a validated Catalog model.

    Lookups never raise: unknown instructors or levels yield empty lists,
    unknown lessons yield None.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def get_instructors(self) -> list[Instructor]:
        """Get all instructors, in file order."""
        return list(self.catalog.instructors)

    def get_instructor(self, instructor: str) -> Optional[Instructor]:
        return self.catalog.get_instructor(instructor)

    def get_levels(self, instructor: str) -> list[Level]:
        """Get all levels for an instructor, in curriculum order."""
        found = self.catalog.get_instructor(instructor)
        if not found:
            return []
        return list(found.levels)

    def get_level(self, instructor: str, level: str) -> Optional[Level]:
        found = self.catalog.get_instructor(instructor)
        if not found:
            return None
        return found.get_level(level)

    def get_lessons(self, instructor: str, level: str) -> list[Lesson]:
        """Get all lessons for a level, in curriculum order."""
        level_data = self.get_level(instructor, level)
        if not level_data:
            return []
        return list(level_data.lessons)

    def get_lesson(self, instructor: str, level: str, lesson_id: str) -> Optional[Lesson]:
        """Get a single lesson by ID."""
        for lesson in self.get_lessons(instructor, level):
            if lesson.id == lesson_id:
                return lesson
        return None


class YamlCatalog(InMemoryCatalog):
    """Catalog loaded from a YAML file."""

    def __init__(self, path: str | Path):
        """
        Load and validate the catalog file.

        Args:
            path: Path to catalog YAML file

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            pydantic.ValidationError: If the catalog content is malformed
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Catalog not found: {path}")

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        catalog = Catalog.model_validate(data)
        logger.info(
            f"Loaded catalog {self.path} with {len(catalog.instructors)} instructors"
        )
        super().__init__(catalog)
