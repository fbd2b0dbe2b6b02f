"""Taskboard: personal task management backend (service layer)."""

__version__ = "1.0.0"
