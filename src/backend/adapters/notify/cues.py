from __future__ import annotations

import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, Protocol, TextIO

from common.contrast_engine.models import Outcome


class NotifierError(RuntimeError):
    """Raised when a feedback cue cannot be delivered."""


class Notifier(Protocol):
    def notify(self, outcome: Outcome) -> None:
        """Trigger the feedback cue for an outcome."""
        ...


class NullNotifier:
    def notify(self, outcome: Outcome) -> None:
        return None


class BellNotifier:
    """One terminal bell for a match, two for anything else."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def notify(self, outcome: Outcome) -> None:
        stream = self._stream or sys.stdout
        stream.write("\a" if outcome == Outcome.MATCH else "\a\a")
        stream.flush()


class SoundFileNotifier:
    """
    Play a pass/fail sound file through an external player command.

    Notes:
    - MATCH plays the pass sound; MISMATCH and INCOMPLETE play the fail sound.
    - The player is invoked as ``<player args...> <sound file>`` and waited on.
    """

    def __init__(
        self,
        *,
        pass_sound: Path,
        fail_sound: Path,
        player: str = "aplay -q",
        runner: Callable[..., subprocess.CompletedProcess] | None = None,
    ) -> None:
        self._pass_sound = Path(pass_sound)
        self._fail_sound = Path(fail_sound)
        self._player = shlex.split(player)
        if not self._player:
            raise ValueError("Audio player command must not be empty.")
        self._runner = runner or subprocess.run

    def sound_for(self, outcome: Outcome) -> Path:
        return self._pass_sound if outcome == Outcome.MATCH else self._fail_sound

    def notify(self, outcome: Outcome) -> None:
        sound = self.sound_for(outcome)
        if not sound.exists():
            raise NotifierError(f"Audio file {sound} does not exist.")
        try:
            self._runner([*self._player, str(sound)], check=True, capture_output=True)
        except FileNotFoundError as exc:
            raise NotifierError(f"Audio player {self._player[0]!r} not found.") from exc
        except subprocess.CalledProcessError as exc:
            raise NotifierError(f"Audio player failed with exit code {exc.returncode}.") from exc
        except OSError as exc:
            raise NotifierError(f"Audio player {self._player[0]!r} could not run: {exc}") from exc
