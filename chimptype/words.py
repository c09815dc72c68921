from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence

from .errors import WordSourceError

if TYPE_CHECKING:
    from .config import Settings

log = logging.getLogger("chimptype.words")

LANGUAGES_DIR = Path(__file__).resolve().parent / "languages"
DEFAULT_LANGUAGE_PATH = LANGUAGES_DIR / "english.json"

# Used when no language file can be read.
FALLBACK_WORDS = [
    "dog", "cat", "sun", "book", "tree", "ball", "happy", "red", "car", "run",
    "bird", "door", "baby", "hat", "song", "fish", "pen", "bed", "star", "milk",
]


def _valid_word(word: object) -> bool:
    return isinstance(word, str) and bool(word) and not any(c.isspace() for c in word)


def load_word_pool(path: Path) -> List[str]:
    """
    Read a language file of the form {"name": "english", "words": [...]}.
    Every entry must be a non-empty string without whitespace.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise WordSourceError(f"word file not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise WordSourceError(f"cannot read word file {path}: {exc}") from exc

    words = data.get("words") if isinstance(data, dict) else None
    if not isinstance(words, list) or not words:
        raise WordSourceError(f"{path}: expected a non-empty 'words' array")
    bad = [w for w in words if not _valid_word(w)]
    if bad:
        raise WordSourceError(f"{path}: invalid entries in 'words': {bad[:3]!r}")
    return list(words)


class RandomWordSource:
    """Draws `count` distinct words from a pool, in random order, on every call."""

    def __init__(self, pool: Sequence[str], count: int, rng: Optional[random.Random] = None) -> None:
        if not pool:
            raise WordSourceError("word pool is empty")
        if count < 1:
            raise ValueError("count must be at least 1")
        self.pool = list(pool)
        self.count = count
        self.rng = rng or random.Random()

    def __call__(self) -> List[str]:
        return self.rng.sample(self.pool, min(self.count, len(self.pool)))


class StaticWordSource:
    """Always hands out the same words."""

    def __init__(self, words: Sequence[str]) -> None:
        if not words:
            raise WordSourceError("static word list is empty")
        self.words = list(words)

    def __call__(self) -> List[str]:
        return self.words[:]


def word_source_from_settings(settings: "Settings", rng: Optional[random.Random] = None) -> RandomWordSource:
    path = Path(settings.words_file) if settings.words_file else DEFAULT_LANGUAGE_PATH
    try:
        pool = load_word_pool(path)
    except WordSourceError as exc:
        log.warning("%s; using the built-in word list", exc)
        pool = FALLBACK_WORDS[:]
    return RandomWordSource(pool, settings.word_count, rng=rng)
