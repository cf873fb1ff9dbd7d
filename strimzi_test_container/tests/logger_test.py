import logging
import sys

import pytest
from loguru import logger

from strimzi_test_container.logger import (
    StdlibToLoguruHandler,
    configure_logs,
    format_record,
    module_filter,
    shorten_name,
    take_over_thirdparty_loggers,
)


@pytest.fixture
def restore_logging():
    """configure_logs replaces the loguru sinks and the thirdparty handlers,
    put both back for the tests that follow."""
    import testcontainers.core.container  # noqa: F401

    saved = {
        name: (logging.getLogger(name).handlers[:], logging.getLogger(name).propagate)
        for name in logging.root.manager.loggerDict
        if name.startswith(("testcontainers", "docker"))
    }
    yield
    for name, (handlers, propagate) in saved.items():
        thirdparty_logger = logging.getLogger(name)
        thirdparty_logger.handlers = handlers
        thirdparty_logger.propagate = propagate
    logger.remove()
    logger.add(sys.stderr)


def test_module_filter():
    accept = module_filter(exclude=["docker"], include=["docker.api.build"])

    assert accept({"name": "strimzi_test_container.versions"})
    assert not accept({"name": "docker.utils"})
    assert accept({"name": "docker.api.build"})
    assert module_filter()({"name": "docker.utils"})


def test_shorten_name():
    assert shorten_name("strimzi_test_container.versions") == "strimzi_test_container.versions"
    assert (
        shorten_name("strimzi_test_container.containers.kafka.something.really.long")
        == "strimzi_test_container...long"
    )
    assert shorten_name("x" * 50, length=10) == "xxxxxxx..."


def test_format_record_sets_short_name():
    record = {
        "name": "strimzi_test_container.containers.kafka.something.really.long",
        "extra": {},
    }

    assert "{extra[short_name]" in format_record(record)
    assert record["extra"]["short_name"] == "strimzi_test_container...long"


def test_take_over_thirdparty_loggers(restore_logging):
    handler = StdlibToLoguruHandler()
    taken_over = take_over_thirdparty_loggers(handler)

    assert "testcontainers.core.container" in taken_over
    testcontainers_logger = logging.getLogger("testcontainers.core.container")
    assert testcontainers_logger.handlers == [handler]
    assert not testcontainers_logger.propagate


def test_stdlib_records_keep_their_logger_name():
    stdlib_logger = logging.getLogger("strimzi_test_container_tests.stdlib")
    stdlib_logger.handlers = [StdlibToLoguruHandler()]
    stdlib_logger.propagate = False
    messages = []
    sink_id = logger.add(messages.append, format="{name} {level} {message}")
    try:
        stdlib_logger.warning("Pulling image %s", "quay.io/strimzi/kafka")
    finally:
        logger.remove(sink_id)
        stdlib_logger.handlers = []

    assert messages == [
        "strimzi_test_container_tests.stdlib WARNING Pulling image quay.io/strimzi/kafka\n"
    ]


def test_thirdparty_logs_reach_loguru(restore_logging):
    configure_logs()
    messages = []
    logger.add(messages.append, format="{message}")

    logging.getLogger("testcontainers.core.container").warning("Pulling image")

    assert any("Pulling image" in message for message in messages)
