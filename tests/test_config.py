import logging
from pathlib import Path

import pytest

from txcodec.config import CONFIG_ENV_VAR, Config, EnvConfig, config_path
from txcodec.logger import setup_logger


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = EnvConfig(tmp_path / "missing.yaml")
    assert config.log_level == "WARNING"
    assert config.verify_json_hash is True


def test_config_file(tmp_path: Path) -> None:
    path = tmp_path / "txcodec.yaml"
    path.write_text("log_level: DEBUG\nverify_json_hash: false\n")

    config = EnvConfig(path)
    assert config.log_level == "DEBUG"
    assert config.verify_json_hash is False


def test_empty_config_file(tmp_path: Path) -> None:
    path = tmp_path / "txcodec.yaml"
    path.write_text("")

    config = EnvConfig(path)
    assert config.model_dump() == Config().model_dump()
    assert config.log_level == "WARNING"
    assert config.verify_json_hash is True


def test_invalid_config_file(tmp_path: Path) -> None:
    path = tmp_path / "txcodec.yaml"
    path.write_text("log_level: LOUD\n")

    with pytest.raises(ValueError):
        EnvConfig(path)


def test_config_path_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "elsewhere.yaml"
    path.write_text("log_level: ERROR\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert config_path() == path
    assert EnvConfig().log_level == "ERROR"


def test_setup_logger() -> None:
    logger = setup_logger("txcodec.transactions", Config(log_level="DEBUG"))
    assert logger.name == "txcodec.transactions"
    assert logger.isEnabledFor(logging.DEBUG)

    setup_logger("txcodec.transactions", Config(log_level="ERROR"))
    assert logging.getLogger("txcodec").level == logging.ERROR
    assert not logger.isEnabledFor(logging.WARNING)
