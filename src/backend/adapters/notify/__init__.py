"""Feedback cue adapters (sound, bell, none)."""

from .cues import BellNotifier, Notifier, NotifierError, NullNotifier, SoundFileNotifier

__all__ = [
    "BellNotifier",
    "Notifier",
    "NotifierError",
    "NullNotifier",
    "SoundFileNotifier",
]
