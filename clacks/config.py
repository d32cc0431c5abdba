"""Configuration loader for the clacks tower."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Any

from dotenv import load_dotenv
import yaml

from clacks.errors import ConfigurationMissing

DEFAULT_CONFIG_PATH = "config/config.yaml"

ENVIRONMENTS = ("development", "production")
OUTPUTS = ("log", "emulator", "hardware")


@dataclass(frozen=True)
class AlphabetConfig:
    """Supported characters and the message length budget.

    ``characters`` is None when the config selects the built-in alphabet.
    ``fold_case`` is None when unset: the built-in alphabet folds case, a
    custom one does not.
    """

    max_message_len_in_bytes: int
    characters: dict[str, tuple[str, ...]] | None = None
    end: tuple[str, ...] | None = None
    fold_case: bool | None = None


@dataclass(frozen=True)
class TransmissionConfig:
    """Tick cadence and queue limits."""

    tick_seconds: float
    queue_size: int
    idle_messages: tuple[str, ...] = ()
    inject_after_idle_ticks: int = 12


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""

    host: str
    port: int
    environment: str = "development"


@dataclass(frozen=True)
class DisplayConfig:
    """Shutter output configuration."""

    output: str = "log"
    emulator_path: str = "emulator_output/frame.png"
    i2c_bus: int = 1
    i2c_address: int = 0x40


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    alphabet: AlphabetConfig
    transmission: TransmissionConfig
    server: ServerConfig
    log: LoggingConfig
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ConfigurationMissing(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ConfigurationMissing(f"'{key}' config must be a mapping")
    return section


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationMissing(f"'{name}' must be a positive integer, got {value!r}")
    return value


def _positive_float(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationMissing(f"'{name}' must be a number, got {value!r}") from exc
    if number <= 0:
        raise ConfigurationMissing(f"'{name}' must be > 0, got {value!r}")
    return number


def _locations(value: Any, context: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigurationMissing(f"{context} must be a list of shutter locations")
    return tuple(str(item) for item in value)


def _parse_alphabet(section: dict[str, Any]) -> AlphabetConfig:
    max_len = _positive_int(
        _require_key(section, "max_message_len_in_bytes", "alphabet"),
        "alphabet.max_message_len_in_bytes",
    )
    characters_raw = section.get("characters", "default")
    if characters_raw == "default":
        characters = None
    elif isinstance(characters_raw, dict) and characters_raw:
        characters = {
            str(character): _locations(locations, f"alphabet.characters[{character!r}]")
            for character, locations in characters_raw.items()
        }
    else:
        raise ConfigurationMissing(
            "'alphabet.characters' must be 'default' or a non-empty mapping of character to shutters"
        )

    end_raw = section.get("end")
    end = _locations(end_raw, "alphabet.end") if end_raw is not None else None
    fold_case_raw = section.get("fold_case")
    return AlphabetConfig(
        max_message_len_in_bytes=max_len,
        characters=characters,
        end=end,
        fold_case=None if fold_case_raw is None else bool(fold_case_raw),
    )


def _parse_transmission(section: dict[str, Any]) -> TransmissionConfig:
    idle_raw = section.get("idle_messages") or []
    if not isinstance(idle_raw, list):
        raise ConfigurationMissing("'transmission.idle_messages' must be a list of strings")
    return TransmissionConfig(
        tick_seconds=_positive_float(
            _require_key(section, "tick_seconds", "transmission"), "transmission.tick_seconds"
        ),
        queue_size=_positive_int(
            _require_key(section, "queue_size", "transmission"), "transmission.queue_size"
        ),
        idle_messages=tuple(str(message) for message in idle_raw),
        inject_after_idle_ticks=_positive_int(
            section.get("inject_after_idle_ticks", 12), "transmission.inject_after_idle_ticks"
        ),
    )


def _parse_server(section: dict[str, Any]) -> ServerConfig:
    host = os.environ.get("CLACKS_HOST") or str(_require_key(section, "host", "server"))
    port_raw: Any = os.environ.get("CLACKS_PORT") or _require_key(section, "port", "server")
    try:
        port = int(port_raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationMissing(f"'server.port' must be an integer, got {port_raw!r}") from exc
    environment = str(section.get("environment", "development"))
    if environment not in ENVIRONMENTS:
        raise ConfigurationMissing(
            f"'server.environment' must be one of {', '.join(ENVIRONMENTS)}, got {environment!r}"
        )
    return ServerConfig(host=host, port=port, environment=environment)


def _int_value(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationMissing(f"'{name}' must be an integer, got {value!r}")
    try:
        return int(value, 0) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationMissing(f"'{name}' must be an integer, got {value!r}") from exc


def _parse_display(
section: dict[str, Any]) -> DisplayConfig:
    output = str(section.get("output", DisplayConfig.output))
    if output not in OUTPUTS:
        raise ConfigurationMissing(f"'display.output' must be one of {', '.join(OUTPUTS)}, got {output!r}")
    return DisplayConfig(
        output=output,
        emulator_path=str(section.get("emulator_path", DisplayConfig.emulator_path)),
        i2c_bus=_int_value(section.get("i2c_bus", DisplayConfig.i2c_bus), "display.i2c_bus"),
        i2c_address=_int_value(
            section.get("i2c_address", DisplayConfig.i2c_address), "display.i2c_address"
        ),
    )


def load_config(path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ConfigurationMissing(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ConfigurationMissing("Config file must contain a mapping at the top level")

    alphabet = _parse_alphabet(_require_section(data, "alphabet"))
    transmission = _parse_transmission(_require_section(data, "transmission"))
    server = _parse_server(_require_section(data, "server"))
    logging_section = _require_section(data, "logging")

    display_section = data.get("display") or {}
    if not isinstance(display_section, dict):
        raise ConfigurationMissing("'display' config must be a mapping")

    level = str(_require_key(logging_section, "level", "logging")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationMissing(f"'logging.level' is not a known log level: {level!r}")
    log_config = LoggingConfig(
        level=level,
        log_dir=str(_require_key(logging_section, "log_dir", "logging")),
    )

    return AppConfig(
        alphabet=alphabet,
        transmission=transmission,
        server=server,
        log=log_config,
        display=_parse_display(display_section),
    )


__all__ = [
    "AlphabetConfig",
    "AppConfig",
    "DisplayConfig",
    "LoggingConfig",
    "ServerConfig",
    "TransmissionConfig",
    "load_config",
]
