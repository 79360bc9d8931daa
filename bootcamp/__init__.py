"""Bootcamp - video lessons, quizzes and progress tracking."""

__version__ = "0.1.0"
