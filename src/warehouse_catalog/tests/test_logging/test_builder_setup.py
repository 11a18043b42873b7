import logging

import pytest

from warehouse_catalog.config import load_settings
from warehouse_catalog.core.logging.builder import make_dict_config, setup_logging


@pytest.fixture
def restore_root_logger():
    """setup_logging replaces the root handlers; put the session's back afterwards."""
    root = logging.getLogger()
    handlers, level, filters = list(root.handlers), root.level, list(root.filters)
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    root.filters[:] = filters


def test_make_dict_config_with_files(tmp_path):
    settings = load_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path, LOG_FORMAT="json")

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert cfg["handlers"]["console"]["formatter"] == "json"
    assert cfg["formatters"]["json"]["service"] == "warehouse-catalog"


def test_make_dict_config_stdout_only(tmp_path):
    settings = load_settings(LOG_TO_STDOUT=True, LOG_DIR=tmp_path, LOG_FORMAT="text")

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "standard"
    assert cfg["handlers"]["error_console"]["formatter"] == "json"


def test_sql_logging_is_opt_in():
    assert make_dict_config(load_settings())["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert make_dict_config(load_settings(ENABLE_SQL_LOGGING=True))["loggers"]["sqlalchemy.engine"]["level"] == "INFO"


def test_setup_logging_creates_log_dir(tmp_path, restore_root_logger):
    log_dir = tmp_path / "logs"
    settings = load_settings(LOG_TO_STDOUT=False, LOG_DIR=log_dir, LOG_LEVEL="debug")
    assert not log_dir.exists()

    setup_logging(settings)

    assert log_dir.exists()
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers
