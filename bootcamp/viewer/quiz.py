"""
Quiz renderer - Multiple choice quiz display and scoring.

Provides:
- Question rendering with options
- Answer checking and scoring
- Score display
"""

import html
from typing import Optional, Sequence

from bootcamp.schemas import QuizQuestion


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #111827;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #10b981;
    }
    .quiz-title {
        font-weight: 600;
        color: #10b981;
        font-size: 1.1em;
        margin-bottom: 0.5em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #e5e7eb;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-option {
        padding: 0.5em 1em;
        border-radius: 6px;
        margin: 0.3em 0;
        color: #d1d5db;
        background: #1f2937;
    }
    .quiz-option-correct {
        background: #065f46;
        color: white;
    }
    .quiz-option-wrong {
        background: #7f1d1d;
        color: white;
    }
    .quiz-score-box {
        background: #064e3b;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #34d399;
    }
    .quiz-score-label {
        color: #9ca3af;
        font-size: 0.9em;
    }
    </style>
    """


def count_correct(questions: Sequence[QuizQuestion], answers: Sequence[Optional[int]]) -> int:
    """
    Count correctly answered questions.

    Args:
        questions: Quiz questions in order
        answers: Selected option index per question (None if unanswered)

    Raises:
        ValueError: If the number of answers doesn't match the questions
    """
    if len(answers) != len(questions):
        raise ValueError(f"Expected {len(questions)} answers, got {len(answers)}")
    return sum(1 for q, a in zip(questions, answers) if a == q.answer)


def grade_quiz(questions: Sequence[QuizQuestion], answers: Sequence[Optional[int]]) -> float:
    """Score a quiz as a fraction 0.0-1.0. An empty quiz scores 1.0."""
    return calculate_quiz_score(questions, count_correct(questions, answers))["score"]


def calculate_quiz_score(questions: Sequence[QuizQuestion], correct_count: int) -> dict:
    """
    Calculate quiz score.

    Args:
        questions: Total questions
        correct_count: Number answered correctly

    Returns:
        Dict with score info
    """
    total = len(questions)
    if total == 0:
        return {"score": 1.0, "percent": 100, "correct": 0, "total": 0}

    score = correct_count / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct_count,
        "total": total,
    }


def render_quiz_question(
    question: QuizQuestion,
    index: int,
    selected: Optional[int] = None,
    show_answer: bool = False,
) -> str:
    """
    Render a single quiz question.

    Args:
        question: QuizQuestion object
        index: 0-based position in the quiz
        selected: Option chosen by the student
        show_answer: Whether to mark correct/wrong options

    Returns:
        HTML string for the question
    """
    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-title">Question {index + 1}</div>')
    parts.append(f'<div class="quiz-question">{html.escape(question.question)}</div>')

    for i, option in enumerate(question.options):
        css = "quiz-option"
        if show_answer and i == question.answer:
            css += " quiz-option-correct"
        elif show_answer and i == selected:
            css += " quiz-option-wrong"
        parts.append(f'<div class="{css}">{html.escape(option)}</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(score_info: dict) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{score_info['correct']} of {score_info['total']} correct</div>
    </div>
    """
