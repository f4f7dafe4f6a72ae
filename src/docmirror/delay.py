"""Randomized pause between page fetches."""

import logging
import random
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PolitenessDelay:
    """Sleeps for a random interval in [min_delay, max_delay] between fetches.

    The random source is passed in so a caller can seed it once per run, or
    substitute a fixed sequence under test.
    """

    def __init__(
        self,
        min_delay: float,
        max_delay: float,
        rng: Optional[random.Random] = None,
        enabled: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_delay > max_delay:
            raise ValueError("min_delay must not exceed max_delay")
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.rng = rng or random.Random()
        self.enabled = enabled
        self._sleep = sleep

    def sample(self) -> float:
        return self.min_delay + self.rng.random() * (self.max_delay - self.min_delay)

    def pause(self) -> float:
        """Block for one sampled delay; returns the seconds slept."""
        if not self.enabled:
            return 0.0
        delay = self.sample()
        logger.info("Pausing for %.3f seconds", delay)
        self._sleep(delay)
        return delay
