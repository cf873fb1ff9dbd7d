from unittest import mock

import pytest
from loguru import logger

from strimzi_test_container import pytest_plugin


class FakeConfig:
    def __init__(self, configure_logs: bool):
        self.ini = {"strimzi_configure_logs": configure_logs}

    def getini(self, name):
        return self.ini[name]


@pytest.fixture
def error_messages():
    messages = []
    sink_id = logger.add(messages.append, format="{level} {message}", level="ERROR")
    yield messages
    logger.remove(sink_id)


@pytest.mark.parametrize("enabled", [False, True])
def test_log_configuration_is_opt_in(enabled):
    with mock.patch.object(pytest_plugin, "configure_logs") as configure_logs:
        pytest_plugin.pytest_configure(FakeConfig(enabled))

    assert configure_logs.called is enabled


def test_addoption_registers_ini_flag():
    parser = mock.MagicMock()
    pytest_plugin.pytest_addoption(parser)

    args, kwargs = parser.addini.call_args
    assert args == ("strimzi_configure_logs",)
    assert kwargs["type"] == "bool"
    assert kwargs["default"] is False


def test_stop_container_failure_is_logged_not_raised(error_messages):
    container = mock.MagicMock()
    container.image = "quay.io/strimzi/kafka:0.28.0-kafka-3.1.0"
    container.stop.side_effect = RuntimeError("daemon gone")

    pytest_plugin.stop_container(container)

    container.stop.assert_called_once()
    assert error_messages[0].startswith(
        "ERROR Failed to stop container: quay.io/strimzi/kafka:0.28.0-kafka-3.1.0"
    )
    assert "RuntimeError: daemon gone" in error_messages[0]


def test_remove_network_failure_is_logged_not_raised(error_messages):
    network = mock.MagicMock()
    network.name = "strimzi-tests"
    network.remove.side_effect = RuntimeError("network in use")

    pytest_plugin.remove_network(network)

    assert error_messages[0].startswith("ERROR Failed to remove network: strimzi-tests")
    assert "RuntimeError: network in use" in error_messages[0]
