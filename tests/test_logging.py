"""Tests for lean_repo.utils.logging and create_engine wiring."""

import json
import logging

import pytest

from lean_repo import EngineConfig, FileDriver, InMemoryDriver, SyncEngine, create_engine
from lean_repo.utils.logging import JsonFormatter, configure_root_logger, get_logger


@pytest.fixture
def fresh_logger_name(request):
    """Unique logger name, with handlers removed afterwards."""
    name = f"lean_repo_test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestJsonFormatter:

    def test_basic_fields(self):
        record = logging.LogRecord("lean_repo.x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "lean_repo.x"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_kept(self):
        record = logging.LogRecord("lean_repo", logging.INFO, __file__, 1, "sync", None, None)
        record.sync_stats = {"key": "k", "emissions": 2}
        data = json.loads(JsonFormatter().format(record))
        assert data["sync_stats"] == {"key": "k", "emissions": 2}

    def test_unserializable_extra_stringified(self):
        record = logging.LogRecord("lean_repo", logging.INFO, __file__, 1, "sync", None, None)
        record.thing = object()
        data = json.loads(JsonFormatter().format(record))
        assert data["thing"].startswith("<object")

    def test_standard_attributes_not_duplicated(self):
        record = logging.LogRecord("lean_repo", logging.INFO, __file__, 1, "sync", None, None)
        data = json.loads(JsonFormatter().format(record))
        assert "pathname" not in data
        assert "lineno" not in data


class TestGetLogger:

    def test_string_level(self, fresh_logger_name):
        logger = get_logger(fresh_logger_name, level="debug")
        assert logger.level == logging.DEBUG

    def test_no_duplicate_handlers(self, fresh_logger_name):
        get_logger(fresh_logger_name)
        logger = get_logger(fresh_logger_name)
        assert len(logger.handlers) == 1

    def test_file_output(self, fresh_logger_name, tmp_path):
        log_file = tmp_path / "logs" / "lean.log"
        logger = get_logger(fresh_logger_name, json_output=True, log_file=log_file, console=False)
        logger.info("written")
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip()
        assert json.loads(line)["message"] == "written"


class TestConfigureRootLogger:

    def test_replaces_handlers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            configure_root_logger(level="WARNING")
            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestCreateEngine:

    def test_default_memory(self):
        engine = create_engine()
        assert isinstance(engine, SyncEngine)
        assert isinstance(engine.driver, InMemoryDriver)

    def test_file_driver_with_config(self, tmp_path):
        config = EngineConfig(default_strategy="cache_first")
        engine = create_engine("file", engine_config=config, config=tmp_path)
        assert isinstance(engine.driver, FileDriver)
        assert engine.config is config

    def test_configure_logging(self, tmp_path):
        log_file = tmp_path / "engine.log"
        logger = logging.getLogger("lean_repo")
        saved_handlers, saved_level = list(logger.handlers), logger.level
        logger.handlers.clear()
        try:
            create_engine(
                engine_config=EngineConfig(log_level="DEBUG", json_logs=True, log_file=log_file),
                configure_logging=True,
            )
            assert logger.level == logging.DEBUG
            assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved_handlers
            logger.setLevel(saved_level)
