from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional

log = logging.getLogger("chimptype.config")

CONFIG_PATH = Path(__file__).resolve().parent / "chimptype.config.json"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class Settings:
    word_count: int = 25
    words_file: Optional[str] = None
    padding: int = 10
    log_level: str = "WARNING"


def load_config(path: Optional[Path] = None) -> Dict[str, object]:
    path = CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        # a broken config must not keep the test from starting
        log.warning("ignoring config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("ignoring config %s: top level is not an object", path)
        return {}
    return data


def _positive_int(value: object, default: int, minimum: int = 1) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def settings_from_config(config: Dict[str, object]) -> Settings:
    defaults = Settings()
    words_file = config.get("words_file")
    log_level = str(config.get("log_level", defaults.log_level)).upper()
    if log_level not in LOG_LEVELS:
        log_level = defaults.log_level
    return Settings(
        word_count=_positive_int(config.get("word_count", defaults.word_count), defaults.word_count),
        words_file=str(words_file) if isinstance(words_file, str) and words_file else None,
        padding=_positive_int(config.get("padding", defaults.padding), defaults.padding, minimum=0),
        log_level=log_level,
    )


def load_settings(path: Optional[Path] = None, **overrides: object) -> Settings:
    """Settings from the config file, with non-None keyword overrides applied on top."""
    settings = settings_from_config(load_config(path))
    changes = {k: v for k, v in overrides.items() if v is not None}
    if "log_level" in changes:
        changes["log_level"] = str(changes["log_level"]).upper()
    return replace(settings, **changes)
