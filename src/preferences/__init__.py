"""Preference capture module."""

from src.preferences.models import ContentPreferences, MusicPreferences
from src.preferences.store import PreferenceStore

__all__ = [
    "ContentPreferences",
    "MusicPreferences",
    "PreferenceStore",
]
