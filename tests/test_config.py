import logging

import pytest
from loguru import logger

from docseq.core import config


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    logger.remove()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_routes_stdlib_records_to_loguru(monkeypatch, restore_logging):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("LOG_FILE_PATH", raising=False)

    config.setup_logging()
    captured = []
    logger.add(lambda message: captured.append(message.record), level="DEBUG")

    logging.getLogger("docseq.db.counter_store").debug("Next count for 'Invoice.number': 3")

    assert any(isinstance(h, config.InterceptHandler) for h in logging.getLogger().handlers)
    assert [record["message"] for record in captured] == ["Next count for 'Invoice.number': 3"]
    assert captured[0]["level"].name == "DEBUG"


def test_setup_logging_quiets_pymongo(restore_logging):
    config.setup_logging()
    assert logging.getLogger("pymongo").level == logging.WARNING


def test_database_defaults():
    assert config.MONGODB_URL.startswith("mongodb")
    assert config.DATABASE_NAME
    assert config.COUNTER_COLLECTION
