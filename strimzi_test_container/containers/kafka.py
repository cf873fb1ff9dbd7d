from typing import Dict, List, Mapping, Optional

from testcontainers.core.container import DockerContainer
from testcontainers.core.network import Network
from testcontainers.core.waiting_utils import wait_for_logs

from strimzi_test_container import versions
from strimzi_test_container.config import strimzi_test_container_config
from strimzi_test_container.exceptions import ContainerNotStartedError
from strimzi_test_container.listeners import (
    KAFKA_PORT,
    STARTER_SCRIPT,
    build_listener_configuration,
    build_server_overrides,
    render_starter_script,
    wait_for_starter_script_command,
)
from strimzi_test_container.logger import logger
from strimzi_test_container.schemas import ListenerConfiguration
from strimzi_test_container.utils import (
    copy_file_to_container,
    wait_for_network_ip_addresses,
)

KAFKA_STARTED_LOG = r"\[KafkaServer id=\d+\] started"


class StrimziKafkaContainer(DockerContainer):
    """A single-node Kafka broker running the quay.io/strimzi/kafka image of
    the given Kafka version.

    ZooKeeper either runs embedded inside the Kafka container (the default), or
    is external, i.e: a StrimziZookeeperContainer on the same network. Additional
    broker configuration is passed as server.properties overrides.

    The listeners of the broker depend on the addresses the container gets, so
    the container is started first, waiting for a starter script that is only
    copied into it once those addresses are known.

    Usage:
        with StrimziKafkaContainer.create(broker_id=1) as kafka:
            producer = KafkaProducer(bootstrap_servers=kafka.get_bootstrap_servers())

    This container is a good fit for integration testing, for more hardcore testing
    use StrimziKafkaCluster.
    """

    def __init__(
        self,
        broker_id: int = 0,
        additional_kafka_configuration: Optional[Mapping[str, str]] = None,
        external_zookeeper_connect: Optional[str] = None,
        kafka_version: Optional[str] = None,
        image: Optional[str] = None,
        network: Optional[Network] = None,
        docker_client_kw: Optional[dict] = None,
        **kwargs,
    ) -> None:
        if image is None:
            self.kafka_version = versions.resolve_kafka_version(kafka_version)
            image = versions.get_image_name(self.kafka_version)
        else:
            self.kafka_version = kafka_version

        super().__init__(image=image, docker_client_kw=docker_client_kw, **kwargs)

        self.broker_id = broker_id
        self.kafka_configuration: Dict[str, str] = {
            str(name): str(value)
            for name, value in (additional_kafka_configuration or {}).items()
        }
        self.kafka_configuration["broker.id"] = str(broker_id)
        self.external_zookeeper_connect: Optional[str] = None
        self.kafka_exposed_port: Optional[int] = None
        self.listener_configuration: Optional[ListenerConfiguration] = None
        self.startup_timeout = strimzi_test_container_config.STARTUP_TIMEOUT

        # exposing kafka port from the container
        self.with_exposed_ports(KAFKA_PORT)
        self.with_env("LOG_DIR", "/tmp")

        if network is not None:
            self.with_network(network)
        if external_zookeeper_connect:
            self.with_external_zookeeper(external_zookeeper_connect)

    @classmethod
    def create(cls, broker_id: int, **kwargs) -> "StrimziKafkaContainer":
        return cls(broker_id=broker_id, **kwargs)

    @classmethod
    def create_with_additional_configuration(
        cls, broker_id: int, additional_kafka_configuration: Mapping[str, str], **kwargs
    ) -> "StrimziKafkaContainer":
        return cls(
            broker_id=broker_id,
            additional_kafka_configuration=additional_kafka_configuration,
            **kwargs,
        )

    @classmethod
    def create_with_external_zookeeper(
        cls,
        broker_id: int,
        connect_string: str,
        additional_kafka_configuration: Optional[Mapping[str, str]] = None,
        **kwargs,
    ) -> "StrimziKafkaContainer":
        return cls(
            broker_id=broker_id,
            additional_kafka_configuration=additional_kafka_configuration,
            **kwargs,
        ).with_external_zookeeper(connect_string)

    def with_external_zookeeper(self, connect_string: str) -> "StrimziKafkaContainer":
        """do not start the embedded zookeeper, connect to the given one
        instead."""
        self.external_zookeeper_connect = connect_string
        self.with_env("KAFKA_ZOOKEEPER_CONNECT", connect_string)
        return self

    def with_startup_timeout(self, timeout: int) -> "StrimziKafkaContainer":
        self.startup_timeout = timeout
        return self

    @property
    def uses_embedded_zookeeper(self) -> bool:
        return self.external_zookeeper_connect is None

    def start(self) -> "StrimziKafkaContainer":
        self.with_command(wait_for_starter_script_command(STARTER_SCRIPT))
        super().start()
        try:
            self._container_is_starting()
            wait_for_logs(self, KAFKA_STARTED_LOG, timeout=self.startup_timeout)
        except Exception:
            logger.error(
                "Kafka broker {broker_id} failed to start, stopping its container",
                broker_id=self.broker_id,
            )
            self.stop()
            raise
        logger.info(
            "Kafka broker {broker_id} is up at {bootstrap_servers}",
            broker_id=self.broker_id,
            bootstrap_servers=self.get_bootstrap_servers(),
        )
        return self

    def stop(self, force=True, delete_volume=True) -> None:
        super().stop(force=force, delete_volume=delete_volume)
        self.kafka_exposed_port = None
        self.listener_configuration = None

    def _container_is_starting(self):
        """the container runs and waits for the starter script, writes it."""
        container = self.get_wrapped_container()
        self.kafka_exposed_port = int(self.get_exposed_port(KAFKA_PORT))
        logger.info("This is mapped port {port}", port=self.kafka_exposed_port)

        ip_addresses = wait_for_network_ip_addresses(
            container, strimzi_test_container_config.NETWORK_DISCOVERY_TIMEOUT
        )
        self.listener_configuration = build_listener_configuration(
            self.get_bootstrap_servers(), ip_addresses
        )
        logger.info(
            "This is all advertised listeners for Kafka {listeners}",
            listeners=self.listener_configuration.advertised,
        )

        overrides = build_server_overrides(
            self.listener_configuration,
            zookeeper_connect=self.external_zookeeper_connect,
            additional_configuration=self.kafka_configuration,
        )
        script = render_starter_script(
            overrides, embedded_zookeeper=self.uses_embedded_zookeeper
        )
        logger.info("Copying command to '{path}' script.", path=STARTER_SCRIPT)
        copy_file_to_container(container, script.encode("utf-8"), STARTER_SCRIPT)

    def get_bootstrap_servers(self) -> str:
        if self.kafka_exposed_port is None:
            raise ContainerNotStartedError(
                "the Kafka container must be started before its bootstrap servers are known"
            )
        return f"PLAINTEXT://{self.get_container_host_ip()}:{self.kafka_exposed_port}"

    @staticmethod
    def get_supported_kafka_versions() -> List[str]:
        return versions.get_supported_kafka_versions()

    @staticmethod
    def get_latest_kafka_version() -> str:
        return versions.get_latest_kafka_version()

    @staticmethod
    def get_strimzi_test_container_image_version() -> str:
        return versions.get_strimzi_test_container_image_version()
