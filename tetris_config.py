
CONFIG = {
    "CELL_SIZE": 28,
    "TICK_MS": 50,
    "HIGH_SCORE_PATH": "highscore.txt",
    "SEED": None,
    "LOG_LEVEL": "INFO",
}
