"""
Alert executor writes alert lines to the console.
"""
from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from loguru import logger


class AlertExecutor:
    def __init__(self, *, stream: Optional[TextIO] = None) -> None:
        # None means "whatever sys.stdout is at emit time"
        self._stream = stream
        self._running = False
        self.emitted_count = 0

    def start(self) -> None:
        logger.info("AlertExecutor started")
        self._running = True

    def stop(self) -> None:
        logger.info("AlertExecutor stopped | emitted={}", self.emitted_count)
        self._running = False

    def emit(self, lines: List[str]) -> None:
        """Print each line in order, one per line. Dropped while stopped."""
        if not self._running:
            return
        stream = self._stream or sys.stdout
        for line in lines:
            print(line, file=stream, flush=True)
        self.emitted_count += len(lines)
