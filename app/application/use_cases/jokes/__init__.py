"""Joke-related use cases."""

from .create_joke import MAX_JOKE_LENGTH, MIN_JOKE_LENGTH, create_joke

__all__ = ["MAX_JOKE_LENGTH", "MIN_JOKE_LENGTH", "create_joke"]
