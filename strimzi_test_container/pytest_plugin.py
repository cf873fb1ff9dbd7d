"""pytest fixtures of the Strimzi test containers.

Registered through the ``pytest11`` entry point, so installing the package
is enough for the fixtures to be available in any test session.

The plugin leaves logging to the test session. Set ``strimzi_configure_logs
= true`` in the pytest ini file to route logs through this package's loguru
sink instead.
"""
import pytest
from testcontainers.core.network import Network

from strimzi_test_container.containers.kafka import StrimziKafkaContainer
from strimzi_test_container.logger import configure_logs, logger


def pytest_addoption(parser):
    parser.addini(
        "strimzi_configure_logs",
        type="bool",
        default=False,
        help="configure loguru (and take over the testcontainers/docker loggers) "
        "from the STRIMZI_TEST_CONTAINER_LOG_* settings",
    )


def pytest_configure(config):
    if config.getini("strimzi_configure_logs"):
        configure_logs()


def remove_network(network: Network):
    try:
        network.remove()
    except Exception:
        logger.exception("Failed to remove network: {name}", name=network.name)


def stop_container(container: StrimziKafkaContainer):
    try:
        container.stop()
    except Exception:
        logger.exception("Failed to stop container: {image}", image=container.image)


@pytest.fixture(scope="session")
def strimzi_network():
    """Creates a Docker network and yields it.

    The network is removed after all tests have finished running.
    """
    network = Network().create()
    yield network
    remove_network(network)


@pytest.fixture(scope="session")
def kafka_container(strimzi_network: Network):
    """Fixture that yields a running single-node Kafka broker with an
    embedded ZooKeeper.

    The container is started once and kept running throughout the
    entire test session.
    """
    container = StrimziKafkaContainer.create(broker_id=1, network=strimzi_network)
    container.start()
    yield container
    stop_container(container)


@pytest.fixture(scope="session")
def kafka_bootstrap_servers(kafka_container: StrimziKafkaContainer) -> str:
    return kafka_container.get_bootstrap_servers()
