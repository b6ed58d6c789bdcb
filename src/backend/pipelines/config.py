from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

NOTIFIER_KINDS = ("sound", "bell", "none")


@dataclass(frozen=True)
class ContrastConfig:
    rules_path: Path
    create_missing_rules: bool
    reload_per_call: bool
    log_path: Path
    log_max_bytes: int
    log_backup_count: int
    log_console: bool
    notifier: str
    pass_sound: Path
    fail_sound: Path
    audio_player: str


def get_contrast_config() -> ContrastConfig:
    """
    Load contrast host configuration from environment variables (and `.env`).

    Reads:
      CONTRAST_RULES_PATH, CONTRAST_CREATE_MISSING_RULES, CONTRAST_RELOAD_PER_CALL,
      CONTRAST_LOG_PATH, CONTRAST_LOG_MAX_BYTES, CONTRAST_LOG_BACKUP_COUNT,
      CONTRAST_LOG_CONSOLE, CONTRAST_NOTIFIER, CONTRAST_PASS_SOUND,
      CONTRAST_FAIL_SOUND, CONTRAST_AUDIO_PLAYER
    """
    notifier = os.getenv("CONTRAST_NOTIFIER", "sound").strip().lower()
    if notifier not in NOTIFIER_KINDS:
        raise ValueError(f"CONTRAST_NOTIFIER must be one of {', '.join(NOTIFIER_KINDS)}.")

    return ContrastConfig(
        rules_path=Path(_env_str("CONTRAST_RULES_PATH", "rules.toml")),
        create_missing_rules=_env_bool("CONTRAST_CREATE_MISSING_RULES", True),
        reload_per_call=_env_bool("CONTRAST_RELOAD_PER_CALL", False),
        log_path=Path(_env_str("CONTRAST_LOG_PATH", "contrast.log")),
        log_max_bytes=_env_int("CONTRAST_LOG_MAX_BYTES", 1024 * 1024, minimum=0),
        log_backup_count=_env_int("CONTRAST_LOG_BACKUP_COUNT", 2, minimum=0),
        log_console=_env_bool("CONTRAST_LOG_CONSOLE", False),
        notifier=notifier,
        pass_sound=Path(_env_str("CONTRAST_PASS_SOUND", "audio/pass.wav")),
        fail_sound=Path(_env_str("CONTRAST_FAIL_SOUND", "audio/fail.wav")),
        audio_player=_env_str("CONTRAST_AUDIO_PLAYER", "aplay -q"),
    )


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {value!r}.")


def _env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc
    if minimum is not None and parsed < minimum:
        raise ValueError(f"{name} must be >= {minimum}.")
    return parsed
