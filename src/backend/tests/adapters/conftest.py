import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import adapters...` work when running this folder alone.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timezone

import pytest

from common.contrast_engine.models import ContrastResult, Outcome


@pytest.fixture
def make_result():
    def _make(
        *,
        identifier="AB12",
        reference="AB12",
        outcome: Outcome = Outcome.MATCH,
        generated_at=None,
    ) -> ContrastResult:
        return ContrastResult(
            generated_at=generated_at or datetime(2025, 12, 31, 8, 15, 0, tzinfo=timezone.utc),
            identifier=identifier,
            reference=reference,
            outcome=outcome,
        )

    return _make
