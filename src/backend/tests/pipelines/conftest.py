import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import pipelines...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

CONTRAST_ENV_VARS = (
    "CONTRAST_RULES_PATH",
    "CONTRAST_CREATE_MISSING_RULES",
    "CONTRAST_RELOAD_PER_CALL",
    "CONTRAST_LOG_PATH",
    "CONTRAST_LOG_MAX_BYTES",
    "CONTRAST_LOG_BACKUP_COUNT",
    "CONTRAST_LOG_CONSOLE",
    "CONTRAST_NOTIFIER",
    "CONTRAST_PASS_SOUND",
    "CONTRAST_FAIL_SOUND",
    "CONTRAST_AUDIO_PLAYER",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONTRAST_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def rules_path(tmp_path):
    path = tmp_path / "rules.toml"
    path.write_text(
        '[sn_rules]\nsn = "SN:(\\\\w+)"\n\n[paper_rules]\nlabel = "LBL#(\\\\w+)"\n',
        encoding="utf-8",
    )
    return path
