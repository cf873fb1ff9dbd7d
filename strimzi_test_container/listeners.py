"""Listener plan and launch script of a single Kafka broker.

Nothing in here talks to docker: the container feeds in the addresses it
was assigned, and gets back the script it has to copy into itself.
"""
import shlex
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from strimzi_test_container.exceptions import ListenerConfigurationError
from strimzi_test_container.schemas import PLAINTEXT, KafkaListener, ListenerConfiguration

KAFKA_PORT = 9092
ZOOKEEPER_PORT = 2181
BROKER_LISTENER_PORT = 9093
BROKER_LISTENER_PREFIX = "BROKER"
ANY_ADDRESS = "0.0.0.0"

STARTER_SCRIPT = "/testcontainers_start.sh"
ZOOKEEPER_START_COMMAND = "bin/zookeeper-server-start.sh config/zookeeper.properties"
KAFKA_START_COMMAND = "bin/kafka-server-start.sh config/server.properties"

Overrides = List[Tuple[str, str]]


def build_listener_configuration(
    bootstrap_servers: str, network_ip_addresses: Sequence[str]
) -> ListenerConfiguration:
    """one uniquely named listener per network, numbered from 1 in the given
    order, each on its own port."""
    if not network_ip_addresses:
        raise ListenerConfigurationError(
            "the container is not attached to any network, cannot advertise broker listeners"
        )

    advertised_listeners = []
    bound_listeners = []
    for number, ip_address in enumerate(network_ip_addresses, start=1):
        # must be always unique
        name = f"{BROKER_LISTENER_PREFIX}{number}"
        port = BROKER_LISTENER_PORT + number - 1
        advertised_listeners.append(KafkaListener(name=name, host=ip_address, port=port))
        bound_listeners.append(KafkaListener(name=name, host=ANY_ADDRESS, port=port))
    bound_listeners.append(
        KafkaListener(name=PLAINTEXT, host=ANY_ADDRESS, port=KAFKA_PORT)
    )

    return ListenerConfiguration(
        bootstrap_servers=bootstrap_servers,
        bound_listeners=bound_listeners,
        advertised_listeners=advertised_listeners,
        inter_broker_listener_name=advertised_listeners[0].name,
    )


def build_server_overrides(
    listener_configuration: ListenerConfiguration,
    zookeeper_connect: Optional[str] = None,
    additional_configuration: Optional[Mapping[str, str]] = None,
) -> Overrides:
    """server.properties overrides, the listener setup first, then the
    additional configuration in insertion order."""
    overrides = [
        ("listeners", listener_configuration.listeners),
        ("advertised.listeners", listener_configuration.advertised),
        ("zookeeper.connect", zookeeper_connect or f"localhost:{ZOOKEEPER_PORT}"),
        ("listener.security.protocol.map", listener_configuration.security_protocol_map),
        ("inter.broker.listener.name", listener_configuration.inter_broker_listener_name),
    ]
    for config_name, config_value in (additional_configuration or {}).items():
        overrides.append((str(config_name), str(config_value)))
    return overrides


def render_override_flags(overrides: Iterable[Tuple[str, str]]) -> str:
    return "".join(
        f" --override {shlex.quote(f'{name}={value}')}" for name, value in overrides
    )


def render_starter_script(overrides: Iterable[Tuple[str, str]], embedded_zookeeper: bool) -> str:
    command = "#!/bin/bash\n"
    if embedded_zookeeper:
        command += f"{ZOOKEEPER_START_COMMAND} &\n"
    command += KAFKA_START_COMMAND + render_override_flags(overrides)
    return command + "\n"


def wait_for_starter_script_command(path: str = STARTER_SCRIPT) -> List[str]:
    """the container is up before its configuration is ready, so the
    entrypoint polls for the starter script before executing it."""
    return ["sh", "-c", f"while [ ! -f {path} ]; do sleep 0.1; done; {path}"]
