"""
Run the host health monitor loop.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from host_monitor.controllers.health_monitor_controller import HealthMonitorController, MonitorConfig


def load_config(path: Optional[str]) -> MonitorConfig:
    if not path:
        return MonitorConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise SystemExit(f"Config not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return MonitorConfig(**data)


def configure_logging(level: str, log_file: Optional[str]) -> None:
    # Diagnostics go to stderr (and the optional file) at the same level;
    # stdout carries only alert lines
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
    if not log_file:
        return
    log_path = Path(log_file)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(str(log_path), level=level, rotation="10 MB", retention="10 days")
    except OSError as e:
        logger.warning("Failed to configure file logging {}: {}", log_path, e)
        return
    logger.info("File logging enabled: {}", log_path)


def main(argv: Optional[List[str]] = None) -> None:
    # Load environment variables from .env if present
    load_dotenv()
    parser = argparse.ArgumentParser(description="Poll a host stats endpoint and print threshold alerts")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config")
    parser.add_argument("--log-level", type=str, default="INFO", help="Log level for stderr and the optional log file")
    parser.add_argument("--once", action="store_true", help="Run a single poll cycle and exit")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(args.log_level, config.log_file)

    controller = HealthMonitorController(config)
    controller.start()

    try:
        if args.once:
            controller.on_tick()
        else:
            logger.info("Monitor started. Press Ctrl+C to stop.")
            controller.run_forever()
    except KeyboardInterrupt:
        logger.info("Stopping...")
    finally:
        controller.stop()


if __name__ == "__main__":
    main()
