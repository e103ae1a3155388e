"""Shared random source for template rendering.

Renderer trees are shared across worker threads, so every draw goes
through a single lock. Tests construct their own RandomSource with a
fixed seed to get repeatable output.
"""

import logging
import random
import threading
import time
from typing import Any, MutableSequence, Optional

from blaster.config import RANDOM_SEED

logger = logging.getLogger(__name__)


class RandomSource:
    """Lock-guarded wrapper around random.Random.

    Usage:
        source = RandomSource(seed=7)
        source.randrange(10)
        source.read_bytes(128)
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize the source.

        Args:
            seed: Fixed seed (default: current time in nanoseconds)
        """
        if seed is None:
            seed = time.time_ns()
        self.seed = seed
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def randrange(self, stop: int) -> int:
        """Uniform integer in [0, stop)."""
        with self._lock:
            return self._rng.randrange(stop)

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        with self._lock:
            return self._rng.random()

    def choice(self, seq: str) -> Any:
        with self._lock:
            return self._rng.choice(seq)

    def shuffle(self, items: MutableSequence[Any]) -> None:
        """Shuffle items in place."""
        with self._lock:
            self._rng.shuffle(items)

    def read_bytes(self, n: int) -> bytes:
        """Read n random bytes.

        Raises:
            OSError: If the underlying source cannot produce bytes
        """
        with self._lock:
            return self._rng.randbytes(n)


# Global source instance
_source: Optional[RandomSource] = None
_source_lock = threading.Lock()


def get_random_source() -> RandomSource:
    """Get the process-wide random source, seeded once on first use."""
    global _source
    with _source_lock:
        if _source is None:
            _source = RandomSource(seed=RANDOM_SEED)
            logger.info(f"Random source seeded with {_source.seed}")
        return _source
