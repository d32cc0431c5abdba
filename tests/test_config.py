from __future__ import annotations

import textwrap

import pytest

from clacks.config import AppConfig, load_config
from clacks.errors import ConfigurationMissing


VALID_YAML = """
alphabet:
  max_message_len_in_bytes: 2
  characters:
    "A": [MIDDLE_LEFT, BOTTOM_RIGHT]
    "B": [MIDDLE_RIGHT, BOTTOM_LEFT]

transmission:
  tick_seconds: 0.5
  queue_size: 10
  idle_messages: ["AB"]

server:
  host: "127.0.0.1"
  port: 8080

display:
  output: emulator
  i2c_address: 0x41

logging:
  level: "info"
  log_dir: "logs/"
"""

MINIMAL_YAML = """
alphabet:
  max_message_len_in_bytes: 20
transmission:
  tick_seconds: 5
  queue_size: 10
server:
  host: "0.0.0.0"
  port: 8080
logging:
  level: "INFO"
  log_dir: "logs/"
"""


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch) -> None:
    monkeypatch.delenv("CLACKS_HOST", raising=False)
    monkeypatch.delenv("CLACKS_PORT", raising=False)


def _write_yaml(tmp_path, contents: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


def test_load_config_valid(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.alphabet.max_message_len_in_bytes == 2
    assert config.alphabet.characters == {
        "A": ("MIDDLE_LEFT", "BOTTOM_RIGHT"),
        "B": ("MIDDLE_RIGHT", "BOTTOM_LEFT"),
    }
    assert config.transmission.tick_seconds == 0.5
    assert config.transmission.idle_messages == ("AB",)
    assert config.server.port == 8080
    assert config.server.environment == "development"
    assert config.display.output == "emulator"
    assert config.display.i2c_address == 0x41
    assert config.log.level == "INFO"


def test_load_config_defaults(tmp_path) -> None:
    config = load_config(_write_yaml(tmp_path, MINIMAL_YAML))

    assert config.alphabet.characters is None
    assert config.alphabet.end is None
    assert config.transmission.inject_after_idle_ticks == 12
    assert config.display.output == "log"


def test_environment_overrides_server(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("CLACKS_HOST", "10.0.0.5")
    monkeypatch.setenv("CLACKS_PORT", "9000")

    config = load_config(_write_yaml(tmp_path, MINIMAL_YAML))

    assert config.server.host == "10.0.0.5"
    assert config.server.port == 9000


def test_load_config_missing_file(tmp_path) -> None:
    missing_path = tmp_path / "does_not_exist.yaml"

    with pytest.raises(ConfigurationMissing):
        load_config(str(missing_path))


def test_configuration_missing_is_a_value_error(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_config(str(tmp_path / "nope.yaml"))


def test_load_config_missing_alphabet_section(tmp_path) -> None:
    yaml_text = """
    transmission:
      tick_seconds: 5
      queue_size: 10
    server:
      host: "0.0.0.0"
      port: 8080
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


def test_load_config_missing_max_length(tmp_path) -> None:
    yaml_text = MINIMAL_YAML.replace("  max_message_len_in_bytes: 20\n", "  fold_case: true\n")

    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


@pytest.mark.parametrize(
    "needle, replacement",
    [
        ("tick_seconds: 5", "tick_seconds: 0"),
        ("queue_size: 10", "queue_size: -1"),
        ("queue_size: 10", "queue_size: true"),
        ("port: 8080", "port: eighty"),
        ("max_message_len_in_bytes: 20", "max_message_len_in_bytes: 0"),
    ],
)
def test_load_config_invalid_values(tmp_path, needle: str, replacement: str) -> None:
    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, MINIMAL_YAML.replace(needle, replacement)))


def test_load_config_rejects_unknown_environment(tmp_path) -> None:
    yaml_text = MINIMAL_YAML.replace("  port: 8080\n", "  port: 8080\n  environment: staging\n")

    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


def test_load_config_rejects_unknown_output(tmp_path) -> None:
    yaml_text = MINIMAL_YAML + "display:\n  output: projector\n"

    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


def test_load_config_rejects_non_list_shutters(tmp_path) -> None:
    yaml_text = MINIMAL_YAML.replace(
        "  max_message_len_in_bytes: 20\n",
        "  max_message_len_in_bytes: 20\n  characters:\n    \"A\": TOP_LEFT\n",
    )

    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


def test_display_i2c_values_accept_quoted_hex(tmp_path) -> None:
    yaml_text = MINIMAL_YAML + "display:\n  i2c_bus: \"1\"\n  i2c_address: \"0x40\"\n"

    config = load_config(_write_yaml(tmp_path, yaml_text))

    assert config.display.i2c_bus == 1
    assert config.display.i2c_address == 0x40


@pytest.mark.parametrize("address", ["\"forty\"", "\"0xZZ\"", "true", "[64]"])
def test_display_rejects_bad_i2c_address(tmp_path, address: str) -> None:
    yaml_text = MINIMAL_YAML + f"display:\n  i2c_address: {address}\n"

    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


def test_load_config_rejects_unknown_log_level(tmp_path) -> None:
    yaml_text = MINIMAL_YAML.replace('level: "INFO"', 'level: "LOUD"')

    with pytest.raises(ConfigurationMissing):
        load_config(_write_yaml(tmp_path, yaml_text))


def test_fold_case_is_unset_unless_configured(tmp_path) -> None:
    assert load_config(_write_yaml(tmp_path, MINIMAL_YAML)).alphabet.fold_case is None

    yaml_text = MINIMAL_YAML.replace(
        "  max_message_len_in_bytes: 20\n", "  max_message_len_in_bytes: 20\n  fold_case: false\n"
    )
    assert load_config(_write_yaml(tmp_path, yaml_text)).alphabet.fold_case is False
