"""Sicilia AI tutor chat."""

from .client import TutorClient, TutorConversation, FALLBACK_REPLY

__all__ = [
    "TutorClient",
    "TutorConversation",
    "FALLBACK_REPLY",
]
