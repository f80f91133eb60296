"""High-score record stored as a single plain-text integer.

A missing or corrupt record counts as "no record" (0); failures never abort the game.
"""

from __future__ import annotations

import logging
import os
from typing import Union

logger = logging.getLogger(__name__)

DEFAULT_HIGHSCORE_FILE = "highscore.dat"

PathLike = Union[str, "os.PathLike[str]"]


def load_high_score(path: PathLike = DEFAULT_HIGHSCORE_FILE) -> int:
    if not os.path.exists(path):
        return 0
    try:
        with open(path, "r", encoding="utf-8") as fh:
            line = fh.readline()
        value = int(line.strip())
    except (OSError, ValueError) as exc:
        logger.warning("Could not load high score from %s: %s", path, exc)
        return 0
    if value < 0:
        logger.warning("Ignoring negative high score %d in %s", value, path)
        return 0
    return value


def save_high_score(value: int, path: PathLike = DEFAULT_HIGHSCORE_FILE) -> bool:
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(str(int(value)))
    except OSError as exc:
        logger.error("Could not save high score to %s: %s", path, exc)
        return False
    return True
