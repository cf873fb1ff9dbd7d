from strimzi_test_container.containers import (
    StrimziKafkaCluster,
    StrimziKafkaContainer,
    StrimziZookeeperContainer,
)
from strimzi_test_container.exceptions import (
    ContainerNotStartedError,
    ListenerConfigurationError,
    StarterScriptCopyError,
    StrimziTestContainerError,
    UnsupportedKafkaVersionError,
)
from strimzi_test_container.versions import (
    get_latest_kafka_version,
    get_strimzi_test_container_image_version,
    get_supported_kafka_versions,
)
