"""Logging tests: redaction, JSON formatting, logger namespacing and file setup."""

import json
import logging

from larasanic_api.logging import JSONFormatter, LoggerConfig, SensitiveDataFilter, getLogger
from larasanic_api.support import Config


def make_record(msg, args=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord("larasanic_api.test", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSensitiveDataFilter:
    """Credential values are masked."""

    def test_redacts_dict_repr(self):
        text = SensitiveDataFilter().redact("Creating User: {'name': 'Ada', 'password': 'hunter2'}")
        assert "hunter2" not in text
        assert "'password': '[REDACTED]'" in text
        assert "'name': 'Ada'" in text

    def test_redacts_json(self):
        text = SensitiveDataFilter().redact('{"api_key": "abc123", "id": 1}')
        assert text == '{"api_key": "[REDACTED]", "id": 1}'

    def test_additional_fields(self):
        text = SensitiveDataFilter(["ssn"]).redact("{'ssn': '123-45-6789'}")
        assert "123-45-6789" not in text

    def test_filter_rewrites_args(self):
        record = make_record("payload %s", ("{'token': 'xyz'}",))
        assert SensitiveDataFilter().filter(record) is True
        assert "xyz" not in record.getMessage()


class TestJSONFormatter:
    """Structured output."""

    def test_includes_extras(self):
        record = make_record("Applied filter step 'ids'", filter_step="ids")
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Applied filter step 'ids'"
        assert data["level"] == "INFO"
        assert data["logger"] == "larasanic_api.test"
        assert data["filter_step"] == "ids"


class TestLoggers:
    """Logger names and setup."""

    def test_names_nested_under_package(self):
        assert getLogger("tests.module").name == "larasanic_api.tests.module"
        assert getLogger("larasanic_api.repositories").name == "larasanic_api.repositories"
        assert getLogger().name == "larasanic_api"

    def test_setup_writes_json_file(self, app_base):
        Config.set("app.app_env", "development")
        Config.set("app.app_debug", False)
        logger = LoggerConfig.setup_logger("larasanic_api_test", file_name="api")
        try:
            logger.debug("Updating Author 1: {'password': 'secret-value'}")
            for handler in logger.handlers:
                handler.flush()

            lines = (app_base / "storage" / "logs" / "api.log").read_text().splitlines()
            entry = json.loads(lines[-1])
            assert entry["level"] == "DEBUG"
            assert "secret-value" not in entry["message"]
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_level_by_environment(self):
        assert LoggerConfig.get_level_by_environment("production") == logging.WARNING
        assert LoggerConfig.get_level_by_environment("local") == logging.INFO
