import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timezone

import pytest

from common.contrast_engine.loader import load_document
from common.contrast_engine.models import Channel, PatternRule


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 12, 31, 8, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_document():
    def _make(*, sn_rules=None, paper_rules=None, omit=()) -> dict:
        document = {
            "sn_rules": dict(sn_rules or {}),
            "paper_rules": dict(paper_rules or {}),
        }
        for section in omit:
            document.pop(section, None)
        return document

    return _make


@pytest.fixture
def make_rules():
    def _make(*patterns: str, channel: Channel = Channel.IDENTIFIER) -> tuple[PatternRule, ...]:
        section = {f"rule_{i}": pattern for i, pattern in enumerate(patterns)}
        ruleset = load_document(
            {
                Channel.IDENTIFIER.section: section if channel is Channel.IDENTIFIER else {},
                Channel.REFERENCE.section: section if channel is Channel.REFERENCE else {},
            }
        )
        return ruleset.rules_for(channel)

    return _make


@pytest.fixture
def rules_file(tmp_path):
    def _make(text: str, *, name: str = "rules.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _make
