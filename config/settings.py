"""
FairPlay Engine - Configuration

House edges, caps and sampling ceilings for the outcome engine.
Every value can be overridden from the environment (or a local .env file):

    EDGE_DICE=0.99
    EDGE_MINES=0.97
    CRASH_MAX_MULTIPLIER=1000000
    KENO_MAX_DRAWS=1000

Edges are expressed as the RTP factor e < 1 (0.99 means a 1% house edge).
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent.parent


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class FairPlayConfig:

    # --- House edge per game family (RTP factor) ---
    EDGE_DICE   = _env_float("EDGE_DICE",   0.99)
    EDGE_CRASH  = _env_float("EDGE_CRASH",  0.99)
    EDGE_MINES  = _env_float("EDGE_MINES",  0.97)
    EDGE_HILO   = _env_float("EDGE_HILO",   0.99)
    EDGE_PLINKO = _env_float("EDGE_PLINKO", 0.99)
    EDGE_WHEEL  = _env_float("EDGE_WHEEL",  0.97)
    EDGE_SLOTS  = _env_float("EDGE_SLOTS",  0.96)
    EDGE_RPS    = _env_float("EDGE_RPS",    0.99)

    # --- Caps & ceilings ---
    CRASH_MAX_MULTIPLIER = _env_float("CRASH_MAX_MULTIPLIER", 1_000_000.0)
    KENO_MAX_DRAWS       = _env_int("KENO_MAX_DRAWS", 1000)

    # --- Seed sizes (bytes of entropy) ---
    SEED_BYTES        = _env_int("SEED_BYTES", 32)
    CLIENT_SEED_BYTES = _env_int("CLIENT_SEED_BYTES", 10)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def edge_for(cls, game_type: str) -> float:
        """Default RTP factor for a game family. Limbo shares the crash edge."""
        key = {"limbo": "crash"}.get(game_type, game_type)
        return getattr(cls, f"EDGE_{key.upper()}", 0.99)

    @classmethod
    def configure_logging(cls, level: str = None):
        """Install the stdout handler used by the CLI."""
        logger = logging.getLogger("fairplay")
        if not logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter(
                "[%(asctime)s] %(levelname)s %(message)s", datefmt="%H:%M:%S"))
            logger.addHandler(h)
        logger.setLevel(getattr(logging, (level or cls.LOG_LEVEL).upper(), logging.INFO))
        return logger
