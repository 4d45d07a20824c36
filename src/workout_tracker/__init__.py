"""Workout progression and history tracking."""

__version__ = "0.1.0"
