"""Orchestration layer for coordinating corpus text and typing statistics."""

from .typing_session import TypingSession

__all__ = ["TypingSession"]
