"""Shared fixtures: a small two-level catalog and in-memory stores."""

import pytest

from bootcamp.classroom import InMemoryCatalog, InMemoryProgressStore
from bootcamp.schemas import Catalog, Instructor, Lesson, Level, QuizQuestion


def make_lesson(lesson_id: str) -> Lesson:
    return Lesson(
        id=lesson_id,
        title=f"Lesson {lesson_id}",
        description="",
        video_url=f"https://example.com/{lesson_id}",
        quiz=[QuizQuestion(question="Pick A", options=["A", "B"], answer=0)],
    )


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog(Catalog(instructors=[
        Instructor(
            id="alex",
            name="Alex",
            levels=[
                Level(id="beginner", lessons=[make_lesson("L1"), make_lesson("L2"), make_lesson("L3")]),
                Level(id="advanced", lessons=[make_lesson("A1")]),
            ],
        ),
        Instructor(
            id="sam",
            name="Sam",
            levels=[Level(id="beginner", lessons=[make_lesson("L1")])],
        ),
    ]))


@pytest.fixture
def store(catalog) -> InMemoryProgressStore:
    return InMemoryProgressStore(catalog)


class FakeTimer:
    """Stands in for threading.Timer; fires only when told to."""

    instances: list["FakeTimer"] = []

    def __init__(self, interval, function, args=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args)


@pytest.fixture
def fake_timer():
    FakeTimer.instances = []
    return FakeTimer
