"""
HTTP client for the host statistics endpoint.
"""
from __future__ import annotations

import os
import time
from typing import Optional, Tuple

import httpx
from loguru import logger

DEFAULT_STATS_URL = "http://srv.msk01.gigacorp.local/_stats"
DEFAULT_TIMEOUT_S = 5.0


class StatsClient:
    """
    Thin read-only wrapper over a shared httpx client. Every request is bounded
    by a timeout; there are no retries here, the caller counts failures.
    """

    def __init__(
        self,
        stats_url: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        # Precedence: explicit stats_url arg > env override > built-in default
        env_url = os.getenv("HOST_MONITOR_STATS_URL")
        if stats_url:
            self.stats_url = stats_url
        elif env_url:
            self.stats_url = env_url
        else:
            self.stats_url = DEFAULT_STATS_URL
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout, connect=timeout),
            transport=transport,
        )

    def fetch_snapshot(self) -> Tuple[str, bool]:
        """
        GET the stats URL once. Returns (body, True) on a 200 response and
        ("", False) on any transport error or other status.
        """
        t0 = time.time()
        try:
            with self._client.stream("GET", self.stats_url) as r:
                if r.status_code != 200:
                    logger.debug("GET {} non-200: {}", self.stats_url, r.status_code)
                    return "", False
                r.read()
                body = r.text
        except httpx.HTTPError as e:
            logger.debug("GET {} failed: {}", self.stats_url, e)
            return "", False
        elapsed_ms = (time.time() - t0) * 1000.0
        logger.debug("GET {} ok bytes={} latency_ms={:.1f}", self.stats_url, len(body), elapsed_ms)
        return body, True

    def close(self) -> None:
        self._client.close()
