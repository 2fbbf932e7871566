
"""High score persistence: one decimal integer in a flat text file"""
import logging
import os

logger = logging.getLogger(__name__)


class HighScoreStore:
    def __init__(self, path: str = "highscore.txt"):
        self.path = path

    def read(self) -> int:
        """Stored high score, or 0 if the file is missing or unreadable."""
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return int(f.read().strip() or "0")
        except (OSError, ValueError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0

    def write(self, value: int) -> bool:
        """Store value if it beats the stored score. Returns True if written."""
        if value <= self.read():
            return False
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(str(int(value)))
        except OSError as e:
            logger.warning("Could not write high score to %s: %s", self.path, e)
            return False
        logger.info("New high score %d saved to %s", value, self.path)
        return True
