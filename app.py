"""
Bootcamp - Video lesson page with quiz, progress sidebar and final code unlock.

Streamlit application. The lesson is selected with query parameters
mirroring /instructor/{id}/{level}/{lesson}.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st

from bootcamp.classroom import (
    YamlCatalog,
    SqliteProgressStore,
    ProgressController,
    PageState,
    NavigateToLesson,
    UnlockFinalCode,
)
from bootcamp.config import Settings
from bootcamp.viewer import (
    render_video,
    get_quiz_css,
    grade_quiz,
    count_correct,
    calculate_quiz_score,
    render_quiz_question,
    render_quiz_score,
    build_sidebar_items,
    render_progress_tracker,
    generate_final_code,
    verify_final_code,
    render_final_unlock,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = Settings.from_env()

logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Bootcamp",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "catalog" not in st.session_state:
        st.session_state.catalog = YamlCatalog(SETTINGS.catalog_path)

    if "store" not in st.session_state:
        st.session_state.store = SqliteProgressStore(
            st.session_state.catalog,
            SETTINGS.progress_db,
        )

    if "page_key" not in st.session_state:
        st.session_state.page_key = None
        st.session_state.controller = None

    if "quiz_result" not in st.session_state:
        st.session_state.quiz_result = None
        st.session_state.quiz_answers = None


def get_page_params() -> tuple[str, str, str] | None:
    """Read (instructor, level, lesson) from the query string."""
    params = st.query_params
    instructor = params.get("instructor")
    level = params.get("level")
    lesson = params.get("lesson")
    if not (instructor and level and lesson):
        return None
    return instructor, level, lesson


def get_controller(page_key: tuple[str, str, str]) -> ProgressController:
    """Get the controller for the current page, opening a new one on page change."""
    if st.session_state.page_key != page_key:
        if st.session_state.controller is not None:
            st.session_state.controller.close()
        controller = ProgressController(
            st.session_state.catalog,
            st.session_state.store,
            advance_delay=SETTINGS.advance_delay,
        )
        controller.open(*page_key)
        st.session_state.controller = controller
        st.session_state.page_key = page_key
        st.session_state.quiz_result = None
        st.session_state.quiz_answers = None
    return st.session_state.controller


def go_to(instructor: str, level: str, lesson_id: str):
    """Navigate to a lesson page."""
    st.query_params.from_dict({"instructor": instructor, "level": level, "lesson": lesson_id})
    st.rerun()


def go_home():
    st.query_params.clear()
    st.session_state.page_key = None
    st.session_state.controller = None
    st.rerun()


# -----------------------------------------------------------------------------
# Home: Instructor Overview
# -----------------------------------------------------------------------------

def render_home():
    """List instructors and levels with overall progress."""
    st.title("📈 Bootcamp")
    catalog = st.session_state.catalog
    store = st.session_state.store

    for instructor in catalog.get_instructors():
        stats = store.get_stats(instructor.id)
        st.subheader(instructor.name)
        st.progress(stats.percentage / 100, text=f"{stats.percentage}% complete")
        cols = st.columns(max(len(instructor.levels), 1))
        for col, level in zip(cols, instructor.levels):
            with col:
                if level.lessons and st.button(
                    level.title or level.id,
                    key=f"level_{instructor.id}_{level.id}",
                    use_container_width=True,
                ):
                    go_to(instructor.id, level.id, level.lessons[0].id)


# -----------------------------------------------------------------------------
# Sidebar: Lesson List
# -----------------------------------------------------------------------------

def render_sidebar(controller: ProgressController):
    """Render the sidebar with the level's lessons."""
    level = st.session_state.catalog.get_level(controller.instructor, controller.level)
    st.sidebar.title(f"📈 {level.title or level.id}")

    items = build_sidebar_items(
        controller.lessons,
        controller.lesson.id,
        controller.progress,
        controller.instructor,
        controller.level,
    )
    for item in items:
        label = f"{item.indicator} {item.lesson.title}"
        if st.sidebar.button(
            label,
            key=f"lesson_{item.lesson.id}",
            help=f"{item.path} (completed)" if item.completed else item.path,
            type="primary" if item.completed else "secondary",
            disabled=item.is_current,
            use_container_width=True,
        ):
            go_to(controller.instructor, controller.level, item.lesson.id)

    st.sidebar.divider()
    overall = st.session_state.store.get_stats(controller.instructor)
    st.sidebar.markdown(f"**Bootcamp:** {overall.completed}/{overall.total} lessons ({overall.percentage}%)")
    st.sidebar.progress(overall.percentage / 100)

    if st.sidebar.button("Reset level progress", key="reset_level"):
        st.session_state.store.reset_level(controller.instructor, controller.level)
        st.session_state.page_key = None
        st.rerun()

    if st.sidebar.button("Reset all progress", key="reset_all"):
        st.session_state.store.reset_all(controller.instructor)
        st.session_state.page_key = None
        st.rerun()

    if st.sidebar.button("← All instructors"):
        go_home()


# -----------------------------------------------------------------------------
# Main Content: Lesson View
# -----------------------------------------------------------------------------

def render_lesson_view(controller: ProgressController):
    """Render video, progress tracker and quiz."""
    lesson = controller.lesson

    st.markdown(render_video(lesson), unsafe_allow_html=True)

    pos, total = controller.get_lesson_position(lesson.id)
    st.caption(f"Lesson {pos} of {total}")
    st.markdown(render_progress_tracker(controller.stats), unsafe_allow_html=True)

    if st.session_state.quiz_result:
        st.markdown(get_quiz_css(), unsafe_allow_html=True)
        st.markdown(render_quiz_score(st.session_state.quiz_result), unsafe_allow_html=True)
        for i, question in enumerate(lesson.quiz):
            st.markdown(
                render_quiz_question(
                    question, i, selected=st.session_state.quiz_answers[i], show_answer=True
                ),
                unsafe_allow_html=True,
            )

    if controller.state == PageState.LEVEL_COMPLETE:
        st.success("Level complete! Pick another level to keep going.")

    if not lesson.quiz:
        return

    st.divider()
    if controller.state == PageState.QUIZ_ACTIVE:
        render_quiz_section(controller)
    elif st.button("Take Quiz to Continue", key="take_quiz", type="primary", use_container_width=True):
        controller.start_quiz()
        st.rerun()


def render_quiz_section(controller: ProgressController):
    """Render the quiz form and handle submission."""
    lesson = controller.lesson

    with st.form(key=f"quiz_{lesson.id}"):
        answers = []
        for i, question in enumerate(lesson.quiz):
            choice = st.radio(
                f"**Question {i + 1}:** {question.question}",
                options=list(range(len(question.options))),
                format_func=lambda idx, q=question: q.options[idx],
                index=None,
                key=f"quiz_{lesson.id}_{i}",
            )
            answers.append(choice)
        submitted = st.form_submit_button("Submit", type="primary")

    if not submitted:
        return

    score = grade_quiz(lesson.quiz, answers)
    st.session_state.quiz_result = calculate_quiz_score(
        lesson.quiz, count_correct(lesson.quiz, answers)
    )
    st.session_state.quiz_answers = answers
    _, action = controller.complete_quiz(lesson.id, score)

    if isinstance(action, NavigateToLesson):
        st.balloons()
        st.success(f"Lesson complete! Up next: {action.lesson.title}")
        # Leaving the page during the pause stops this run, dropping the navigation
        time.sleep(action.delay_seconds)
        go_to(action.instructor, action.level, action.lesson.id)
    elif isinstance(action, UnlockFinalCode):
        logger.info(f"Showing final code for {action.instructor}")
    st.rerun()


# -----------------------------------------------------------------------------
# Final Code Unlock
# -----------------------------------------------------------------------------

def render_final_unlock_view(controller: ProgressController):
    """Render the final code screen."""
    instructor = st.session_state.catalog.get_instructor(controller.instructor)
    code = generate_final_code(controller.instructor, SETTINGS.final_code_secret)

    st.markdown(render_final_unlock(instructor.name, code), unsafe_allow_html=True)

    entered = st.text_input("Enter your final code to finish")
    if entered:
        if verify_final_code(controller.instructor, SETTINGS.final_code_secret, entered):
            st.success("Code accepted. Congratulations!")
            if st.button("Back to home"):
                go_home()
        else:
            st.error("That code doesn't match.")


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    page = get_page_params()
    if page is None:
        render_home()
        return

    controller = get_controller(page)

    # A missing lesson keeps the page in the loading state
    if controller.state == PageState.LOADING:
        st.markdown("Loading lesson...")
        return

    if controller.state == PageState.BOOTCAMP_UNLOCKED:
        render_final_unlock_view(controller)
        return

    render_sidebar(controller)
    render_lesson_view(controller)


if __name__ == "__main__":
    main()
