from typing import Optional

from testcontainers.core.container import DockerContainer
from testcontainers.core.network import Network
from testcontainers.core.waiting_utils import wait_for_logs

from strimzi_test_container import versions
from strimzi_test_container.config import strimzi_test_container_config
from strimzi_test_container.exceptions import ContainerNotStartedError
from strimzi_test_container.listeners import ZOOKEEPER_PORT, ZOOKEEPER_START_COMMAND
from strimzi_test_container.logger import logger

ZOOKEEPER_STARTED_LOG = r"binding to port .*:2181"


class StrimziZookeeperContainer(DockerContainer):
    """A ZooKeeper node from the same Strimzi image as the Kafka brokers, to
    be used as the external ZooKeeper of StrimziKafkaContainer."""

    def __init__(
        self,
        kafka_version: Optional[str] = None,
        image: Optional[str] = None,
        network: Optional[Network] = None,
        network_alias: str = "zookeeper",
        docker_client_kw: Optional[dict] = None,
        **kwargs,
    ) -> None:
        super().__init__(
            image=image or versions.get_image_name(kafka_version),
            docker_client_kw=docker_client_kw,
            **kwargs,
        )
        self.network_alias = network_alias
        self.zookeeper_exposed_port: Optional[int] = None
        self.startup_timeout = strimzi_test_container_config.STARTUP_TIMEOUT

        self.with_exposed_ports(ZOOKEEPER_PORT)
        self.with_env("LOG_DIR", "/tmp")
        self.with_command(["sh", "-c", ZOOKEEPER_START_COMMAND])

        if network is not None:
            self.with_network(network).with_network_aliases(network_alias)

    def start(self) -> "StrimziZookeeperContainer":
        super().start()
        try:
            self.zookeeper_exposed_port = int(self.get_exposed_port(ZOOKEEPER_PORT))
            wait_for_logs(self, ZOOKEEPER_STARTED_LOG, timeout=self.startup_timeout)
        except Exception:
            logger.error("ZooKeeper failed to start, stopping its container")
            self.stop()
            raise
        logger.info(
            "ZooKeeper is up at {connect_string}",
            connect_string=self.get_connect_string(),
        )
        return self

    def stop(self, force=True, delete_volume=True) -> None:
        self.zookeeper_exposed_port = None
        super().stop(force=force, delete_volume=delete_volume)

    def get_connect_string(self) -> str:
        """connect string for containers on the same network."""
        return f"{self.network_alias}:{ZOOKEEPER_PORT}"

    def get_host_connect_string(self) -> str:
        """connect string reachable from the host running the tests."""
        if self.zookeeper_exposed_port is None:
            raise ContainerNotStartedError(
                "the ZooKeeper container must be started before its mapped port is known"
            )
        return f"{self.get_container_host_ip()}:{self.zookeeper_exposed_port}"
