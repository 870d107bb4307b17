"""Built-in progress observers."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingProgress:
    """Logs run progress every `every` generations and on the last one."""

    def __init__(self, every: int = 1):
        if every <= 0:
            raise ValueError("every must be positive")
        self.every = every

    def on_generation(self, generation: int, total: int) -> None:
        if generation % self.every == 0 or generation == total:
            logger.info(f"Generation {generation}/{total}")
