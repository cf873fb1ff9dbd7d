import logging
import sys
from typing import Callable, Iterable, List

from loguru import logger

from strimzi_test_container.config import strimzi_test_container_config

THIRDPARTY_LOGGER_PREFIXES = ("testcontainers", "docker")
SHORT_NAME_LENGTH = 40


class StdlibToLoguruHandler(logging.Handler):
    """Re-emits stdlib log records through loguru, keeping the name of the
    stdlib logger so the module filter and the format still apply to it."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.patch(
            lambda loguru_record: loguru_record.update(
                name=record.name, function=record.funcName, line=record.lineno
            )
        ).opt(exception=record.exc_info).log(level, record.getMessage())


def module_filter(exclude: Iterable[str] = (), include: Iterable[str] = ()) -> Callable:
    """loguru filter rejecting records of modules starting with a prefix in
    `exclude`, unless they also start with a prefix in `include`."""
    exclude, include = tuple(exclude), tuple(include)

    def accept(record) -> bool:
        name = record["name"] or ""
        return name.startswith(include) or not name.startswith(exclude)

    return accept


def shorten_name(name: str, length: int = SHORT_NAME_LENGTH) -> str:
    """strimzi_test_container.containers.kafka -> strimzi_test_container...kafka"""
    if len(name) <= length:
        return name
    parts = name.split(".")
    if len(parts) > 2:
        name = f"{parts[0]}...{parts[-1]}"
    return name if len(name) <= length else f"{name[:length - 3]}..."


def format_record(record) -> str:
    record["extra"]["short_name"] = shorten_name(record["name"] or "")
    return strimzi_test_container_config.LOG_FORMAT


def take_over_thirdparty_loggers(handler: logging.Handler) -> List[str]:
    """testcontainers attaches its own stream handler to each of its module
    loggers (see ``testcontainers.core.utils.setup_logger``), so every message
    is printed once by testcontainers and once more by whoever handles the
    root logger.

    Each testcontainers/docker logger existing at the time of the call gets
    `handler` as its only handler and stops propagating. Returns their names.
    """
    # importing these modules registers the testcontainers loggers
    import testcontainers.core.container  # noqa: F401
    import testcontainers.core.waiting_utils  # noqa: F401

    logger_names = [
        name
        for name in logging.root.manager.loggerDict
        if name.startswith(THIRDPARTY_LOGGER_PREFIXES)
    ]
    for logger_name in logger_names:
        thirdparty_logger = logging.getLogger(logger_name)
        thirdparty_logger.handlers = [handler]
        thirdparty_logger.propagate = False
    return logger_names


def configure_logs():
    """Create a logger with Loguru according to the configuration, and route
    the stdlib logs of testcontainers and docker into it.

    The root logger is left alone, so pytest's log capturing keeps working.
    """
    if strimzi_test_container_config.LOG_PATCH_THIRDPARTY_LOGS:
        take_over_thirdparty_loggers(StdlibToLoguruHandler())
    # Clean slate
    logger.remove()
    logger.add(
        sys.stderr,
        filter=module_filter(
            exclude=strimzi_test_container_config.LOG_MODULE_EXCLUDE_LIST,
            include=strimzi_test_container_config.LOG_MODULE_INCLUDE_LIST,
        ),
        format=format_record,
        level=strimzi_test_container_config.LOG_LEVEL,
        colorize=strimzi_test_container_config.LOG_COLORIZE,
    )
