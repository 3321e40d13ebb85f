"""Translation through the external ``translator/trans`` command."""

from __future__ import annotations

import subprocess
from pathlib import Path


class TranslationError(RuntimeError):
    """The translator could not be run or failed."""


class Translator:
    def __init__(self, target_lang: str = "en", executable: str | Path | None = None) -> None:
        self.target_lang = target_lang
        self.executable = executable

    def translate(self, text: str) -> str:
        """Return the translation of text, stripped of surrounding whitespace."""
        path = self.executable or Path.cwd() / "translator" / "trans"
        command = [str(path), "-no-warn", "-b", f":{self.target_lang}", text]
        try:
            completed = subprocess.run(command, capture_output=True, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise TranslationError(str(exc)) from exc
        return completed.stdout.decode("utf-8", errors="replace").strip()