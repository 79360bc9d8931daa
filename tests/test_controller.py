"""ProgressController tests: loading, quiz completion and next actions."""

import pytest

from bootcamp.classroom import (
    InMemoryCatalog,
    NavigateToLesson,
    NavigationScheduler,
    PageState,
    ProgressController,
    UnlockFinalCode,
)


@pytest.fixture
def controller(catalog, store, fake_timer):
    return ProgressController(catalog, store, scheduler=NavigationScheduler(fake_timer))


def complete_level(store, instructor, level, lesson_ids):
    for lesson_id in lesson_ids:
        store.save(instructor, level, lesson_id, True, 1.0)


class TestLoading:
    """Test page entry."""

    def test_initial_state_is_loading(self, controller):
        assert controller.state == PageState.LOADING

    def test_load_lesson(self, controller):
        lesson = controller.load_lesson("alex", "beginner", "L2")
        assert lesson.id == "L2"
        assert [l.id for l in controller.lessons] == ["L1", "L2", "L3"]

    def test_load_lesson_goes_through_provider_lookup(self, catalog, store):
        calls = []

        class RecordingCatalog(InMemoryCatalog):
            def get_lesson(self, instructor, level, lesson_id):
                calls.append((instructor, level, lesson_id))
                return super().get_lesson(instructor, level, lesson_id)

        controller = ProgressController(RecordingCatalog(catalog.catalog), store)
        controller.load_lesson("alex", "advanced", "A1")
        assert calls == [("alex", "advanced", "A1")]
        assert [l.id for l in controller.lessons] == ["A1"]

    def test_load_lesson_not_found(self, controller):
        assert controller.load_lesson("alex", "beginner", "missing") is None
        assert controller.lesson is None

    def test_open_missing_lesson_stays_loading(self, controller):
        assert controller.open("alex", "beginner", "missing") == PageState.LOADING
        assert controller.start_quiz() is False
        assert controller.state == PageState.LOADING

    def test_complete_quiz_while_loading_raises(self, controller):
        controller.open("alex", "beginner", "missing")
        with pytest.raises(RuntimeError):
            controller.complete_quiz("missing", 1.0)

    def test_open_ready(self, controller):
        assert controller.open("alex", "beginner", "L1") == PageState.READY
        assert controller.progress == []
        assert controller.bootcamp_completed is False

    def test_load_progress_passthrough(self, controller, store):
        store.save("alex", "beginner", "L2", True, 0.5)
        progress = controller.load_progress("alex", "beginner")
        assert [p.lesson_id for p in progress] == ["L2"]

    def test_load_progress_empty(self, controller):
        assert controller.load_progress("alex", "beginner") == []

    def test_open_records_bootcamp_completion(self, controller, store):
        complete_level(store, "sam", "beginner", ["L1"])
        controller.open("sam", "beginner", "L1")
        assert controller.bootcamp_completed is True
        assert controller.state == PageState.READY


class TestQuizCompletion:
    """Test in-memory and persisted progress updates."""

    def test_first_completion_appends_one_record(self, controller, store):
        controller.open("alex", "beginner", "L1")
        progress, _ = controller.complete_quiz("L1", 0.8)
        assert len(progress) == 1
        assert progress[0].lesson_id == "L1"
        assert progress[0].completed is True
        assert progress[0].quiz_score == 0.8
        assert progress[0].timestamp is not None
        assert store.load("alex", "beginner").lessons[0].quiz_score == 0.8

    def test_repeat_completion_updates_in_place(self, controller):
        controller.open("alex", "beginner", "L1")
        controller.complete_quiz("L1", 0.5)
        first_timestamp = controller.progress[0].timestamp
        progress, _ = controller.complete_quiz("L1", 1.0)
        assert len(progress) == 1
        assert progress[0].quiz_score == 1.0
        assert progress[0].timestamp == first_timestamp

    def test_saved_incomplete_record_updated(self, controller, store):
        store.save("alex", "beginner", "L2", False, None)
        controller.open("alex", "beginner", "L2")
        progress, _ = controller.complete_quiz("L2", 0.5)
        assert len(progress) == 1
        assert progress[0].completed is True

    def test_new_records_append_in_insertion_order(self, controller, store):
        store.save("alex", "beginner", "L3", True, 1.0)
        controller.open("alex", "beginner", "L1")
        progress, _ = controller.complete_quiz("L1", 1.0)
        assert [p.lesson_id for p in progress] == ["L3", "L1"]

    def test_stats_follow_progress(self, controller):
        controller.open("alex", "beginner", "L1")
        assert controller.stats.percentage == 0
        controller.complete_quiz("L1", 1.0)
        stats = controller.stats
        assert (stats.completed, stats.total, stats.percentage) == (1, 3, 33)


class TestNextAction:
    """Test navigation and unlock decisions."""

    def test_navigate_to_next_lesson(self, controller):
        controller.open("alex", "beginner", "L1")
        _, action = controller.complete_quiz("L1", 1.0)
        assert isinstance(action, NavigateToLesson)
        assert action.lesson.id == "L2"
        assert action.delay_seconds == 1.0
        assert action.path == "/instructor/alex/beginner/L2"
        assert controller.state == PageState.READY

    def test_last_lesson_without_bootcamp_complete(self, controller):
        controller.open("alex", "beginner", "L3")
        _, action = controller.complete_quiz("L3", 1.0)
        assert action is None
        assert controller.state == PageState.LEVEL_COMPLETE
        assert not controller.scheduler.pending

    def test_last_lesson_with_bootcamp_complete(self, controller, store):
        complete_level(store, "alex", "beginner", ["L1", "L2"])
        complete_level(store, "alex", "advanced", ["A1"])
        controller.open("alex", "beginner", "L3")
        _, action = controller.complete_quiz("L3", 1.0)
        assert action == UnlockFinalCode(instructor="alex")
        assert controller.state == PageState.BOOTCAMP_UNLOCKED
        assert controller.bootcamp_completed is True

    def test_unlocked_is_terminal(self, controller, store):
        complete_level(store, "sam", "beginner", ["L1"])
        controller.open("sam", "beginner", "L1")
        controller.complete_quiz("L1", 1.0)
        assert controller.start_quiz() is False
        with pytest.raises(RuntimeError):
            controller.complete_quiz("L1", 1.0)

    def test_custom_advance_delay(self, catalog, store):
        controller = ProgressController(catalog, store, advance_delay=0.25)
        controller.open("alex", "beginner", "L1")
        _, action = controller.complete_quiz("L1", 1.0)
        assert action.delay_seconds == 0.25


class TestStateMachine:
    """Test quiz entry and exit."""

    def test_start_quiz(self, controller):
        controller.open("alex", "beginner", "L1")
        assert controller.start_quiz() is True
        assert controller.state == PageState.QUIZ_ACTIVE
        assert controller.start_quiz() is False

    def test_quiz_exit_via_completion(self, controller):
        controller.open("alex", "beginner", "L1")
        controller.start_quiz()
        controller.complete_quiz("L1", 1.0)
        assert controller.state == PageState.READY

    def test_retake_after_level_complete(self, controller):
        controller.open("alex", "beginner", "L3")
        controller.complete_quiz("L3", 0.5)
        assert controller.start_quiz() is True

    def test_lesson_position(self, controller):
        controller.open("alex", "beginner", "L2")
        assert controller.get_lesson_position("L2") == (2, 3)
        assert controller.get_lesson_position("missing") == (0, 3)


class TestScheduledNavigation:
    """Test deferred auto-advance."""

    def test_schedule_and_fire(self, controller, fake_timer):
        controller.open("alex", "beginner", "L1")
        _, action = controller.complete_quiz("L1", 1.0)
        fired = []
        controller.schedule_navigation(action, fired.append)

        timer = fake_timer.instances[-1]
        assert timer.started
        assert timer.daemon
        assert timer.interval == 1.0
        assert controller.scheduler.pending

        timer.fire()
        assert fired == [action]
        assert not controller.scheduler.pending

    def test_close_discards_pending(self, controller, fake_timer):
        controller.open("alex", "beginner", "L1")
        _, action = controller.complete_quiz("L1", 1.0)
        fired = []
        controller.schedule_navigation(action, fired.append)
        controller.close()

        timer = fake_timer.instances[-1]
        assert timer.cancelled
        timer.fire()
        assert fired == []

    def test_reopen_cancels_pending(self, controller, fake_timer):
        controller.open("alex", "beginner", "L1")
        _, action = controller.complete_quiz("L1", 1.0)
        controller.schedule_navigation(action, lambda a: None)
        controller.open("alex", "beginner", "L2")
        assert fake_timer.instances[-1].cancelled
        assert not controller.scheduler.pending
