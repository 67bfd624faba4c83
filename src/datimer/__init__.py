"""Datimer - interactive terminal stopwatch with a pause/resume log."""

__version__ = "0.1.0"
