import os
from functools import lru_cache
from typing import List, Optional, Tuple

from strimzi_test_container.config import strimzi_test_container_config
from strimzi_test_container.exceptions import UnsupportedKafkaVersionError
from strimzi_test_container.logger import logger

SUPPORTED_KAFKA_VERSIONS_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "resources", "supported_kafka.versions"
)


def version_sort_key(version: str) -> Tuple:
    """sorts "3.10.0" after "3.9.0" (numeric parts are compared as
    numbers)."""
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in version.split(".")
    )


def parse_kafka_versions(content: str) -> List[str]:
    versions = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        versions.append(line)
    # sort kafka version from low to high
    return sorted(set(versions), key=version_sort_key)


@lru_cache(maxsize=None)
def _load_supported_kafka_versions(path: str) -> Tuple[str, ...]:
    with open(path, encoding="utf-8") as f:
        versions = parse_kafka_versions(f.read())
    if not versions:
        raise ValueError(f"no Kafka versions listed in {path}")
    logger.info("Supported Kafka versions: {versions}", versions=versions)
    logger.info(
        "Supported Strimzi test container image version: {image_version}",
        image_version=get_strimzi_test_container_image_version(),
    )
    return tuple(versions)


def get_supported_kafka_versions() -> List[str]:
    return list(_load_supported_kafka_versions(SUPPORTED_KAFKA_VERSIONS_PATH))


def get_latest_kafka_version() -> str:
    return get_supported_kafka_versions()[-1]


def get_strimzi_test_container_image_version() -> str:
    return strimzi_test_container_config.IMAGE_VERSION


def resolve_kafka_version(requested: Optional[str] = None) -> str:
    """returns the Kafka version to run.

    The requested version wins, then the configured
    STRIMZI_TEST_CONTAINER_KAFKA_VERSION, then the latest supported
    version. Raises UnsupportedKafkaVersionError when the chosen version
    has no image.
    """
    supported_versions = get_supported_kafka_versions()
    version = requested or strimzi_test_container_config.KAFKA_VERSION
    if not version:
        return supported_versions[-1]
    if version not in supported_versions:
        raise UnsupportedKafkaVersionError(version, supported_versions)
    return version


def get_image_name(kafka_version: Optional[str] = None) -> str:
    return "{repository}:{image_version}-kafka-{kafka_version}".format(
        repository=strimzi_test_container_config.IMAGE_REPOSITORY,
        image_version=get_strimzi_test_container_image_version(),
        kafka_version=resolve_kafka_version(kafka_version),
    )
