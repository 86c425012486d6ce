from __future__ import annotations

import logging

from attendance_dashboard.logging_setup import SensitiveDataFilter, configure_logging, mask_token


def _record(message, *args):
    return logging.LogRecord("attendance_dashboard.test", logging.INFO, __file__, 1, message, args, None)


def test_mask_token():
    assert mask_token("eyJhbGciOi.abc") == "eyJh********"
    assert mask_token("") == "***"


def test_filter_masks_bearer_header():
    record = _record("headers=%s", {"Authorization": "Bearer eyJhbGciOi.secret"})

    SensitiveDataFilter().filter(record)

    assert "secret" not in record.getMessage()
    assert "Bearer ********" in record.getMessage()


def test_filter_masks_access_token_value():
    record = _record('{"access_token": "abc123", "language": "en"}')

    SensitiveDataFilter().filter(record)

    assert "abc123" not in record.getMessage()
    assert '"language": "en"' in record.getMessage()


def test_filter_leaves_plain_messages_untouched():
    record = _record("Loaded %s courses", 3)

    assert SensitiveDataFilter().filter(record)
    assert record.args == (3,)


def test_configure_logging_writes_rotating_file(tmp_path):
    log_file = tmp_path / "logs" / "dashboard.log"
    logger = configure_logging("DEBUG", log_file, name="attendance_dashboard.test_file")

    logger.info("Authorization: Bearer topsecret")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "topsecret" not in content
    assert logger.level == logging.DEBUG

    again = configure_logging("INFO", log_file, name="attendance_dashboard.test_file")
    assert again is logger
    assert len(logger.handlers) == 2
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
