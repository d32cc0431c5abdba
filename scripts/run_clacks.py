"""Run the clacks tower: transmission timer, shutter output and HTTP API."""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clacks.app import ClacksApp
from clacks.config import DEFAULT_CONFIG_PATH, OUTPUTS, AppConfig, load_config
from clacks.errors import ConfigurationMissing
from clacks.log import configure_logging
from clacks.web.server import run_server

logger = logging.getLogger("clacks.run")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to the YAML config")
    parser.add_argument(
        "--output",
        choices=OUTPUTS,
        default=None,
        help="Override the shutter output from the config",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigurationMissing as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration: %s", exc)
        return 2

    log_path = configure_logging(config.log)
    logger.info("Logging to %s", log_path)

    if args.output is not None:
        config = _with_output(config, args.output)

    try:
        tower = ClacksApp(config)
    except ConfigurationMissing as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    except RuntimeError as exc:
        logger.error("Shutter output unavailable: %s", exc)
        return 1

    tower.start()
    try:
        run_server(tower.create_web_app(), config.server.host, config.server.port)
    except KeyboardInterrupt:
        pass
    finally:
        tower.stop()
    return 0


def _with_output(config: AppConfig, output: str) -> AppConfig:
    return replace(config, display=replace(config.display, output=output))


if __name__ == "__main__":
    raise SystemExit(main())
