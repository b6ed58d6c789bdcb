from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

import structlog

from .models import (
    Channel,
    ContrastResult,
    Extraction,
    ExtractionSource,
    Outcome,
    PatternRule,
    RuleSet,
)
from .normalize import normalize

logger = structlog.get_logger(__name__)


def extract_detail(
    raw: Optional[str],
    rules: Optional[Sequence[PatternRule]],
    channel: Channel = Channel.IDENTIFIER,
) -> Optional[Extraction]:
    """Apply one channel's rules to that channel's raw input.

    - No rules: the input passes through, normalized.
    - First matching rule wins; group 1 if it participated, else the whole match.
    - No rule matched: falls back to the normalized input. This never fails,
      so a rule that should have matched but didn't is only visible in the
      resulting mismatch (and at debug log level).
    - ``None`` rules or input means extraction could not run.
    """
    if rules is None or raw is None:
        return None

    if not rules:
        return Extraction(channel=channel, value=normalize(raw), source=ExtractionSource.PASSTHROUGH)

    for rule in rules:
        match = rule.pattern.search(raw)
        if match is None:
            continue
        if rule.pattern.groups >= 1 and match.group(1) is not None:
            text = match.group(1)
        else:
            text = match.group(0)
        return Extraction(
            channel=channel,
            value=normalize(text),
            source=ExtractionSource.RULE,
            rule_position=rule.position,
            rule_label=rule.label,
        )

    logger.bind(service="contrast").debug("no_rule_matched", channel=channel.value, rules=len(rules))
    return Extraction(channel=channel, value=normalize(raw), source=ExtractionSource.FALLBACK)


def extract(
    raw: Optional[str],
    rules: Optional[Sequence[PatternRule]],
    channel: Channel = Channel.IDENTIFIER,
) -> Optional[str]:
    extraction = extract_detail(raw, rules, channel)
    return extraction.value if extraction is not None else None


def classify(identifier: Optional[str], reference: Optional[str]) -> Outcome:
    if identifier is None or reference is None:
        return Outcome.INCOMPLETE
    if identifier == reference:
        return Outcome.MATCH
    return Outcome.MISMATCH


def contrast(
    identifier_raw: Optional[str],
    reference_raw: Optional[str],
    identifier_rules: Optional[Sequence[PatternRule]],
    reference_rules: Optional[Sequence[PatternRule]],
    *,
    now: Optional[datetime] = None,
) -> ContrastResult:
    identifier = extract_detail(identifier_raw, identifier_rules, Channel.IDENTIFIER)
    reference = extract_detail(reference_raw, reference_rules, Channel.REFERENCE)

    identifier_value = identifier.value if identifier is not None else None
    reference_value = reference.value if reference is not None else None

    return ContrastResult(
        generated_at=now or datetime.now(timezone.utc),
        identifier=identifier_value,
        reference=reference_value,
        outcome=classify(identifier_value, reference_value),
        identifier_extraction=identifier,
        reference_extraction=reference,
    )


def contrast_with(
    ruleset: Optional[RuleSet],
    identifier_raw: Optional[str],
    reference_raw: Optional[str],
    *,
    now: Optional[datetime] = None,
) -> ContrastResult:
    if ruleset is None:
        return contrast(identifier_raw, reference_raw, None, None, now=now)
    return contrast(
        identifier_raw,
        reference_raw,
        ruleset.identifier,
        ruleset.reference,
        now=now,
    )
