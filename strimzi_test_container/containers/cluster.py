from typing import Dict, List, Mapping, Optional, Union

from testcontainers.core.network import Network

from strimzi_test_container import versions
from strimzi_test_container.containers.kafka import StrimziKafkaContainer
from strimzi_test_container.containers.zookeeper import StrimziZookeeperContainer
from strimzi_test_container.logger import logger


def internal_topics_configuration(internal_topic_replication_factor: int) -> Dict[str, str]:
    return {
        "offsets.topic.replication.factor": str(internal_topic_replication_factor),
        "num.partitions": str(internal_topic_replication_factor),
        "transaction.state.log.replication.factor": str(
            internal_topic_replication_factor
        ),
        "transaction.state.log.min.isr": str(internal_topic_replication_factor),
    }


class StrimziKafkaCluster:
    """A multi-broker Kafka cluster: one ZooKeeper and `brokers_num` brokers
    sharing a docker network.

    Broker ids are 0..brokers_num-1. Usage:
        with StrimziKafkaCluster(3) as cluster:
            admin = KafkaAdminClient(bootstrap_servers=cluster.get_bootstrap_servers())
    """

    def __init__(
        self,
        brokers_num: int,
        internal_topic_replication_factor: Optional[int] = None,
        additional_kafka_configuration: Optional[Mapping[str, str]] = None,
        kafka_version: Optional[str] = None,
        network: Optional[Network] = None,
    ) -> None:
        if brokers_num < 1:
            raise ValueError("brokers_num should be at least 1")
        if internal_topic_replication_factor is None:
            internal_topic_replication_factor = brokers_num
        if not 1 <= internal_topic_replication_factor <= brokers_num:
            raise ValueError(
                "internal_topic_replication_factor should be between 1 and brokers_num"
            )

        self.brokers_num = brokers_num
        self.internal_topic_replication_factor = internal_topic_replication_factor
        self.kafka_version = versions.resolve_kafka_version(kafka_version)

        # a network passed in by the caller is theirs to remove
        self._owns_network = network is None
        self.network = network if network is not None else Network()
        self._network_created = False
        # containers whose start() returned, in start order
        self._started: List[Union[StrimziZookeeperContainer, StrimziKafkaContainer]] = []

        self.zookeeper = StrimziZookeeperContainer(
            kafka_version=self.kafka_version, network=self.network
        )

        kafka_configuration = internal_topics_configuration(internal_topic_replication_factor)
        kafka_configuration.update(additional_kafka_configuration or {})

        self.brokers: List[StrimziKafkaContainer] = [
            StrimziKafkaContainer.create_with_external_zookeeper(
                broker_id,
                self.zookeeper.get_connect_string(),
                kafka_configuration,
                kafka_version=self.kafka_version,
                network=self.network,
            )
            for broker_id in range(brokers_num)
        ]

    def start(self) -> "StrimziKafkaCluster":
        if self._owns_network:
            self.network.create()
            self._network_created = True
        try:
            self.zookeeper.start()
            self._started.append(self.zookeeper)
            for broker in self.brokers:
                broker.start()
                self._started.append(broker)
        except Exception:
            logger.error("Kafka cluster failed to start, stopping it")
            self.stop()
            raise
        logger.info(
            "Kafka cluster of {brokers_num} brokers is up at {bootstrap_servers}",
            brokers_num=self.brokers_num,
            bootstrap_servers=self.get_bootstrap_servers(),
        )
        return self

    def stop(self):
        """stops the containers that were started, newest first. A container
        that fails to stop does not keep the others running."""
        while self._started:
            container = self._started.pop()
            try:
                container.stop()
            except Exception:
                logger.exception("Failed to stop container: {image}", image=container.image)
        if self._network_created:
            self._network_created = False
            try:
                self.network.remove()
            except Exception:
                logger.exception("Failed to remove network: {name}", name=self.network.name)

    def get_bootstrap_servers(self) -> str:
        return ",".join(broker.get_bootstrap_servers() for broker in self.brokers)

    def __enter__(self) -> "StrimziKafkaCluster":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
