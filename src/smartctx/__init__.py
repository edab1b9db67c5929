"""Conversation memory engine for role-play chat."""

__version__ = "0.1.0"
