from __future__ import annotations

from typing import Any

from .models import Channel


class RuleSetError(ValueError):
    """Raised when a rules document cannot be turned into a RuleSet."""


class RuleSourceError(RuleSetError):
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read rules from {source}: {reason}")


class MissingSectionError(RuleSetError):
    def __init__(self, channel: Channel):
        self.channel = channel
        self.section = channel.section
        super().__init__(f"Rules document is missing the [{channel.section}] section ({channel.value} rules).")


class InvalidSectionError(RuleSetError):
    def __init__(self, channel: Channel, value: Any):
        self.channel = channel
        self.section = channel.section
        super().__init__(
            f"Section [{channel.section}] must map labels to patterns, got {type(value).__name__}."
        )


class RuleCompileError(RuleSetError):
    def __init__(self, channel: Channel, pattern: Any, reason: str, *, label: str = ""):
        self.channel = channel
        self.pattern = pattern
        self.label = label
        self.reason = reason
        where = f"{channel.section}.{label}" if label else channel.section
        super().__init__(f"Invalid {channel.value} rule {where} = '{pattern}': {reason}")
