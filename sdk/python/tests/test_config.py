import logging
import os
from pathlib import Path

import pytest

from dfns_blueprint import BlueprintConfig, ConfigError, configure_logging, load_env


def test_from_env_defaults():
    config = BlueprintConfig.from_env({"BLUEPRINT_ID": "4"})
    assert config.blueprint_id == 4
    assert config.keystore_uri == Path("./keystore")
    assert config.service_id is None
    assert config.call_id is None
    assert config.log_level == "INFO"


def test_from_env_full():
    config = BlueprintConfig.from_env({
        "BLUEPRINT_ID": "4",
        "SERVICE_ID": "9",
        "CALL_ID": " 17 ",
        "KEYSTORE_URI": "/var/lib/dfns",
        "LOG_LEVEL": "debug",
    })
    assert config.service_id == 9
    assert config.call_id == 17
    assert config.keystore_uri == Path("/var/lib/dfns")
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("env", [
    {},
    {"BLUEPRINT_ID": "abc"},
    {"BLUEPRINT_ID": "-1"},
    {"BLUEPRINT_ID": "1", "CALL_ID": "x"},
    {"BLUEPRINT_ID": "1", "LOG_LEVEL": "chatty"},
])
def test_from_env_rejects_bad_values(env):
    with pytest.raises(ConfigError):
        BlueprintConfig.from_env(env)


def test_override_env_file(tmp_path, monkeypatch):
    override = tmp_path / "node.env"
    override.write_text("BLUEPRINT_ID=7\nCALL_ID=3\n", encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BLUEPRINT_ID", "1")
    monkeypatch.setenv("CALL_ID", "0")
    monkeypatch.setenv("BLUEPRINT_ENV_FILE", "node.env")

    load_env()

    config = BlueprintConfig.from_env()
    assert config.blueprint_id == 7
    assert config.call_id == 3
    assert os.environ["BLUEPRINT_ENV_FILE"] == "node.env"


def test_override_env_file_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("BLUEPRINT_ENV_FILE", str(tmp_path / "absent.env"))
    with pytest.raises(ConfigError):
        load_env()


def test_configure_logging_sets_package_level():
    package_logger = logging.getLogger("dfns_blueprint")
    previous = package_logger.level
    try:
        configure_logging("WARNING")
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(previous)
