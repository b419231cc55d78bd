"""
Threshold checks for a host statistics snapshot.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from loguru import logger

from ..utils.metrics import MetricVector

LOAD_AVERAGE_THRESHOLD = 30.0
MEMORY_USAGE_THRESHOLD = 0.80
DISK_USAGE_THRESHOLD = 0.90
NETWORK_USAGE_THRESHOLD = 0.90

BYTES_IN_MB = 1024 * 1024
BITS_IN_MEBIBIT = 1024 * 1024
BYTES_IN_MEGABYTE = 1_000_000


class LoadAverageFormat(str, Enum):
    """How the load average value is rendered in its alert line."""

    TRUNCATE = "truncate"          # 35.9 -> "35"
    TWO_DECIMALS = "two_decimals"  # 35.9 -> "35.90"


class NetworkRatePolicy(str, Enum):
    """How free bandwidth in bytes/s is converted to the reported Mbit/s."""

    BITS_PER_MEBIBIT = "bits_per_mebibit"      # bytes * 8 / 1024^2
    BYTES_PER_MEGABYTE = "bytes_per_megabyte"  # bytes / 10^6, no bit conversion


class ThresholdChecker:
    def __init__(
        self,
        *,
        load_average_format: LoadAverageFormat = LoadAverageFormat.TRUNCATE,
        network_rate_policy: NetworkRatePolicy = NetworkRatePolicy.BITS_PER_MEBIBIT,
    ) -> None:
        self.load_average_format = LoadAverageFormat(load_average_format)
        self.network_rate_policy = NetworkRatePolicy(network_rate_policy)

    def evaluate(self, metrics: MetricVector) -> List[str]:
        """
        Run every check in fixed order (load, memory, disk, network) and
        collect one message per violation. Checks never short-circuit.
        """
        messages: List[str] = []
        for check in (self.check_load, self.check_memory, self.check_disk, self.check_network):
            msg = check(metrics)
            if msg is not None:
                messages.append(msg)
        if messages:
            logger.debug("Threshold violations: {}", len(messages))
        return messages

    # --- Individual checks ---
    def check_load(self, metrics: MetricVector) -> Optional[str]:
        if metrics.load_average <= LOAD_AVERAGE_THRESHOLD:
            return None
        return f"Load Average is too high: {self.format_load(metrics.load_average)}"

    def check_memory(self, metrics: MetricVector) -> Optional[str]:
        usage = _usage(metrics.mem_used, metrics.mem_total)
        if usage is None or usage <= MEMORY_USAGE_THRESHOLD:
            return None
        return f"Memory usage too high: {int(usage * 100)}%"

    def check_disk(self, metrics: MetricVector) -> Optional[str]:
        usage = _usage(metrics.disk_used, metrics.disk_total)
        if usage is None or usage <= DISK_USAGE_THRESHOLD:
            return None
        free_bytes = max(0.0, metrics.disk_total - metrics.disk_used)
        free_mb = int(free_bytes) // BYTES_IN_MB
        return f"Free disk space is too low: {free_mb} Mb left"

    def check_network(self, metrics: MetricVector) -> Optional[str]:
        usage = _usage(metrics.net_used, metrics.net_total)
        if usage is None or usage <= NETWORK_USAGE_THRESHOLD:
            return None
        free_bps = max(0.0, metrics.net_total - metrics.net_used)
        return f"Network bandwidth usage high: {self.to_mbit(free_bps):.0f} Mbit/s available"

    # --- Formatting policies ---
    def format_load(self, value: float) -> str:
        if self.load_average_format is LoadAverageFormat.TWO_DECIMALS:
            return f"{value:.2f}"
        return str(int(value))

    def to_mbit(self, bytes_per_sec: float) -> float:
        if self.network_rate_policy is NetworkRatePolicy.BYTES_PER_MEGABYTE:
            return bytes_per_sec / BYTES_IN_MEGABYTE
        return (bytes_per_sec * 8) / BITS_IN_MEBIBIT


def _usage(used: float, total: float) -> Optional[float]:
    """Ratio used/total, or None when total is not positive (check suppressed)."""
    if total <= 0:
        return None
    return used / total
