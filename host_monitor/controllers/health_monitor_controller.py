"""
Health Monitor Controller

Runs the poll cycle: fetch the stats line, parse it, check thresholds, and
print alerts. Tracks consecutive failed cycles and prints a single notice
when the count reaches FAILURE_NOTICE_THRESHOLD.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, Field

from ..controllers.threshold_checker import LoadAverageFormat, NetworkRatePolicy, ThresholdChecker
from ..executors.alert_executor import AlertExecutor
from ..utils.metrics import parse_stats
from ..utils.stats_client import DEFAULT_TIMEOUT_S, StatsClient

FAILURE_NOTICE_THRESHOLD = 3
UNAVAILABLE_NOTICE = "Unable to fetch server statistic"


class MonitorConfig(BaseModel):
    # None falls through to HOST_MONITOR_STATS_URL, then the built-in URL
    stats_url: Optional[str] = None
    poll_interval: float = Field(5.0, ge=0)
    request_timeout: float = Field(DEFAULT_TIMEOUT_S, gt=0)

    # Output formatting policies
    load_average_format: LoadAverageFormat = LoadAverageFormat.TRUNCATE
    network_rate_policy: NetworkRatePolicy = NetworkRatePolicy.BITS_PER_MEBIBIT

    # Optional rotating log file
    log_file: Optional[str] = None


@dataclass(frozen=True)
class MonitorState:
    consecutive_failures: int = 0

    @property
    def degraded(self) -> bool:
        return self.consecutive_failures > 0


def advance(state: MonitorState, messages: List[str], ok: bool) -> Tuple[MonitorState, List[str]]:
    """
    Apply one poll outcome. A success resets the counter and passes the alert
    messages through. A failure increments it; the notice is returned only on
    the cycle where the count first reaches the threshold.
    """
    if ok:
        return MonitorState(0), list(messages)
    failures = state.consecutive_failures + 1
    if failures == FAILURE_NOTICE_THRESHOLD:
        return MonitorState(failures), [UNAVAILABLE_NOTICE]
    return MonitorState(failures), []


class HealthMonitorController:
    """Owns the client, checker and alert executor, and the failure state."""

    def __init__(
        self,
        config: MonitorConfig,
        *,
        client: Optional[StatsClient] = None,
        checker: Optional[ThresholdChecker] = None,
        alert_exec: Optional[AlertExecutor] = None,
    ):
        self.config = config
        self.state = MonitorState()
        self._running = False
        self.client = client or StatsClient(config.stats_url, timeout=config.request_timeout)
        self.checker = checker or ThresholdChecker(
            load_average_format=config.load_average_format,
            network_rate_policy=config.network_rate_policy,
        )
        self.alert_exec = alert_exec or AlertExecutor()
        self._cycle_count = 0

    def start(self) -> None:
        logger.info(
            "Starting HealthMonitorController | url={} interval={}s timeout={}s",
            self.client.stats_url,
            self.config.poll_interval,
            self.config.request_timeout,
        )
        self._running = True
        self.alert_exec.start()

    def stop(self) -> None:
        logger.info("Stopping HealthMonitorController after {} cycles", self._cycle_count)
        self._running = False
        self.alert_exec.stop()
        self.client.close()

    def poll_once(self) -> Tuple[List[str], bool]:
        """One fetch -> parse -> evaluate attempt. Any layer failure gives ([], False)."""
        body, ok = self.client.fetch_snapshot()
        if not ok:
            return [], False
        metrics, ok = parse_stats(body)
        if not ok or metrics is None:
            logger.debug("Malformed stats payload: {!r}", body[:200])
            return [], False
        return self.checker.evaluate(metrics), True

    def on_tick(self) -> List[str]:
        """Single poll cycle. Returns the lines printed this cycle."""
        if not self._running:
            return []
        self._cycle_count += 1
        messages, ok = self.poll_once()
        self.state, lines = advance(self.state, messages, ok)
        if self.state.degraded:
            logger.debug("Poll cycle failed | consecutiveFailures={}", self.state.consecutive_failures)
        self.alert_exec.emit(lines)
        return lines

    def run_forever(self, sleep: Callable[[float], None] = time.sleep) -> None:
        """Tick, then sleep poll_interval, until stopped or interrupted."""
        while self._running:
            self.on_tick()
            sleep(self.config.poll_interval)
