from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Optional

import structlog

from .loader import RuleSource, load
from .models import RuleSet

logger = structlog.get_logger(__name__)


class RuleSetHolder:
    """Host-owned reference to the current RuleSet.

    The RuleSet itself is immutable; ``reload`` builds a new one and swaps the
    reference. A failed reload keeps the previous snapshot and re-raises.
    """

    def __init__(
        self,
        source: RuleSource,
        *,
        create_missing: bool = False,
        reload_per_call: bool = False,
        loader: Optional[Callable[..., RuleSet]] = None,
    ):
        self._source = source
        self._create_missing = create_missing
        self._reload_per_call = reload_per_call
        self._loader = loader or load
        self._ruleset: Optional[RuleSet] = None
        self._write_lock = threading.Lock()

    @property
    def source(self) -> RuleSource:
        return self._source

    def current(self) -> Optional[RuleSet]:
        return self._ruleset

    def reload(self) -> RuleSet:
        with self._write_lock:
            ruleset = self._loader(self._source, create_missing=self._create_missing)
            self._ruleset = ruleset
        logger.bind(service="contrast").info(
            "rules_reloaded",
            source=str(self._source) if isinstance(self._source, (str, Path)) else "<document>",
            identifier_rules=len(ruleset.identifier),
            reference_rules=len(ruleset.reference),
        )
        return ruleset

    def snapshot(self) -> RuleSet:
        """Rules to use for one invocation, loading them if needed."""
        if self._reload_per_call:
            return self.reload()
        ruleset = self._ruleset
        if ruleset is None:
            ruleset = self.reload()
        return ruleset
