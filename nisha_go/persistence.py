import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_HIGHSCORE_PATH = os.path.join(os.path.expanduser("~"), ".nisha_go", "highscore.json")


class HighScoreStore:
    def load(self):
        raise NotImplementedError

    def save(self, score):
        raise NotImplementedError


class MemoryHighScoreStore(HighScoreStore):
    def __init__(self, score=0.0):
        self.score = score
        self.saves = 0

    def load(self):
        return self.score

    def save(self, score):
        self.score = score
        self.saves += 1


class JsonHighScoreStore(HighScoreStore):
    """High score kept as {"high_score": n} on disk. Failures are logged, never raised."""

    def __init__(self, path=DEFAULT_HIGHSCORE_PATH):
        self.path = path

    def load(self):
        if not os.path.exists(self.path):
            return 0.0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return float(data.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("High score load issue (%s): %s", self.path, e)
            return 0.0

    def save(self, score):
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"high_score": score}, f)
        except OSError as e:
            logger.warning("High score save issue (%s): %s", self.path, e)
