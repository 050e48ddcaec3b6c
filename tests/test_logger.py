# File: tests/test_logger.py
import logging

from follower_scout.logger import LOGGER_NAME, init_logging, lookup_logger


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_lookup_logger_tags_username():
    lg = init_logging(level="DEBUG")
    sink = _Collect()
    lg.addHandler(sink)
    try:
        lookup_logger("boy.throb").info("Fetching %s", "http://example.com/@boy.throb")
        lookup_logger(None).warning("no name")
    finally:
        init_logging()

    first, second = sink.records
    assert first.getMessage() == "[boy.throb] Fetching http://example.com/@boy.throb"
    assert first.username == "boy.throb"
    assert second.getMessage() == "[-] no name"


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "scout.log"
    lg = init_logging(level="INFO", log_file=log_file, log_format="%(levelname)s %(message)s")
    try:
        lookup_logger("someone").info("42 followers")
    finally:
        init_logging()

    assert "INFO [someone] 42 followers" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger(LOGGER_NAME) is lg
    assert lg.propagate is False


def test_reinit_replaces_handlers():
    lg = init_logging()
    init_logging()
    assert len(lg.handlers) == 1
