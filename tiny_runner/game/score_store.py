# tiny_runner/game/score_store.py
"""
Best-score persistence. A convenience, never a correctness requirement:
read problems mean best=0, write problems are logged and skipped.
"""
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config import BEST_KEY, BEST_FILE_DEFAULT

logger = logging.getLogger(__name__)


class MemoryScoreStore:
    """In-process store, used by the headless env and tests."""
    def __init__(self, best: int = 0):
        self.best = int(best)
        self.writes = 0

    def load_best(self) -> int:
        return self.best

    def save_best(self, value: int):
        self.best = int(value)
        self.writes += 1


class ScoreStore:
    """JSON file holding a single integer under a fixed key."""
    def __init__(self, path: Optional[Union[str, Path]] = None, key: str = BEST_KEY):
        self.path = Path(os.path.expanduser(str(path or BEST_FILE_DEFAULT)))
        self.key = key

    def load_best(self) -> int:
        try:
            if not self.path.exists():
                return 0
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = int(data.get(self.key, 0))
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.warning("Could not read best score from %s (%s); using 0", self.path, e)
            return 0
        return value if value > 0 else 0

    def save_best(self, value: int):
        data = {}
        try:
            if self.path.exists():
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    data = loaded
        except (OSError, ValueError):
            pass  # corrupt file gets overwritten
        data[self.key] = int(value)

        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.warning("Could not save best score to %s (%s)", self.path, e)
