from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from adapters.audit import Auditor, LogFileAuditor
from adapters.notify import BellNotifier, Notifier, NotifierError, NullNotifier, SoundFileNotifier
from common.contrast_engine import ContrastResult, RuleSet, RuleSetHolder, contrast_with

from .config import ContrastConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ContrastReply:
    result: ContrastResult
    message: str
    notifier_error: Optional[str] = None


class ContrastService:
    """Invocation surface for a host shell (CLI, GUI, service).

    The engine stays pure; this class loads rules, records the result with the
    auditor and then triggers the notifier.
    """

    def __init__(self, *, holder: RuleSetHolder, auditor: Auditor, notifier: Notifier):
        self._holder = holder
        self._auditor = auditor
        self._notifier = notifier

    @property
    def holder(self) -> RuleSetHolder:
        return self._holder

    def reload_rules(self) -> RuleSet:
        return self._holder.reload()

    def run(self, identifier_raw: str, reference_raw: str, *, now: Optional[datetime] = None) -> ContrastReply:
        ruleset = self._holder.snapshot()
        result = contrast_with(ruleset, identifier_raw, reference_raw, now=now)

        line = self._auditor.record(result)
        logger.bind(service="contrast").info(
            "contrast_completed",
            outcome=result.outcome.value,
            identifier=result.identifier,
            reference=result.reference,
        )

        try:
            self._notifier.notify(result.outcome)
        except NotifierError as exc:
            logger.bind(service="contrast").error("notifier_failed", outcome=result.outcome.value, error=str(exc))
            return ContrastReply(result=result, message=f"Error: {exc}", notifier_error=str(exc))
        return ContrastReply(result=result, message=line)

    def contrast(self, identifier_raw: str, reference_raw: str) -> ContrastResult:
        return self.run(identifier_raw, reference_raw).result

    def contrast_message(self, identifier_raw: str, reference_raw: str) -> str:
        return self.run(identifier_raw, reference_raw).message

    def close(self) -> None:
        close = getattr(self._auditor, "close", None)
        if close is not None:
            close()


def build_notifier(config: ContrastConfig) -> Notifier:
    if config.notifier == "sound":
        return SoundFileNotifier(
            pass_sound=config.pass_sound,
            fail_sound=config.fail_sound,
            player=config.audio_player,
        )
    if config.notifier == "bell":
        return BellNotifier()
    if config.notifier == "none":
        return NullNotifier()
    raise ValueError(f"Unknown notifier '{config.notifier}' (expected 'sound', 'bell' or 'none').")


def build_contrast_service(config: ContrastConfig) -> ContrastService:
    holder = RuleSetHolder(
        config.rules_path,
        create_missing=config.create_missing_rules,
        reload_per_call=config.reload_per_call,
    )
    auditor = LogFileAuditor(
        config.log_path,
        max_bytes=config.log_max_bytes,
        backup_count=config.log_backup_count,
        echo_console=config.log_console,
    )
    return ContrastService(holder=holder, auditor=auditor, notifier=build_notifier(config))
