"""
Settings, logging setup and the exception payloads.
"""

import json
import logging

from todo_engine.config import get_settings
from todo_engine.exceptions import CycleDetectedError, NotFoundError
from todo_engine.logging_config import JsonFormatter, get_logger, setup_logging


class TestSettings:
    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODO_LOG_LEVEL", " debug ")
        monkeypatch.setenv("TODO_JSON_LOGS", "true")
        get_settings.cache_clear()

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.json_logs is True
        assert settings.data_file == tmp_path / "tasks.json"

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    def test_logger_names_are_prefixed(self):
        assert get_logger("services.store").name == "todo_engine.services.store"
        assert get_logger("todo_engine.config").name == "todo_engine.config"

    def test_setup_logging_level_and_format(self):
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        try:
            setup_logging(level="WARNING", json_format=True)

            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])

    def test_json_formatter(self):
        record = logging.LogRecord("todo_engine.x", logging.INFO, __file__, 1, "hello %s", ("you",), None)
        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "todo_engine.x"
        assert payload["message"] == "hello you"


class TestExceptions:
    def test_to_dict(self):
        err = NotFoundError("Task", 7)
        assert err.to_dict() == {
            "error": "not_found",
            "message": "Task with ID 7 not found",
            "details": None,
        }

    def test_cycle_details(self):
        err = CycleDetectedError(1, 2)
        assert err.details[0]["msg"] == "Dependency 1 -> 2 would create a cycle"
