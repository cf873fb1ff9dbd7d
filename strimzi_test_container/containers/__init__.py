from strimzi_test_container.containers.cluster import StrimziKafkaCluster
from strimzi_test_container.containers.kafka import StrimziKafkaContainer
from strimzi_test_container.containers.zookeeper import StrimziZookeeperContainer

__all__ = ["StrimziKafkaCluster", "StrimziKafkaContainer", "StrimziZookeeperContainer"]
