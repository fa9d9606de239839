"""MoodMirror - emotion analysis with history, streaks and a daily journal."""

__version__ = "0.1.0"
