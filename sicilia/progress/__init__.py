"""Sicilia progress syncing."""

from .sync import ProgressSync

__all__ = [
    "ProgressSync",
]
