from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel


class Channel(str, Enum):
    IDENTIFIER = "IDENTIFIER"
    REFERENCE = "REFERENCE"

    @property
    def section(self) -> str:
        # Section names are fixed by the rules document format.
        return {
            Channel.IDENTIFIER: "sn_rules",
            Channel.REFERENCE: "paper_rules",
        }[self]


class Outcome(str, Enum):
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
    INCOMPLETE = "INCOMPLETE"


class ExtractionSource(str, Enum):
    RULE = "RULE"
    PASSTHROUGH = "PASSTHROUGH"
    FALLBACK = "FALLBACK"


@dataclass(frozen=True)
class PatternRule:
    channel: Channel
    position: int
    label: str
    pattern: re.Pattern

    @property
    def text(self) -> str:
        return self.pattern.pattern


class RuleSet(NamedTuple):
    """Loaded rules for both channels, in declaration order.

    Unpacks as ``(identifier_rules, reference_rules)``.
    """

    identifier: tuple[PatternRule, ...] = ()
    reference: tuple[PatternRule, ...] = ()

    def rules_for(self, channel: Channel) -> tuple[PatternRule, ...]:
        if channel is Channel.IDENTIFIER:
            return self.identifier
        return self.reference


class Extraction(BaseModel):
    channel: Channel
    value: str
    source: ExtractionSource
    rule_position: Optional[int] = None
    rule_label: Optional[str] = None


class ContrastResult(BaseModel):
    generated_at: datetime
    identifier: Optional[str] = None
    reference: Optional[str] = None
    outcome: Outcome

    identifier_extraction: Optional[Extraction] = None
    reference_extraction: Optional[Extraction] = None

    @property
    def is_match(self) -> bool:
        return self.outcome == Outcome.MATCH
