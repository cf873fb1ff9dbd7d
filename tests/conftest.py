from pathlib import Path

import docker
import pytest
from docker.errors import DockerException

INTEGRATION_TESTS_DIR = Path(__file__).parent


def docker_is_available() -> bool:
    try:
        docker.from_env().ping()
    except DockerException:
        return False
    return True


def pytest_collection_modifyitems(config, items):
    """the hook sees the whole session, only the tests in this directory
    need a docker daemon."""
    integration_items = [
        item for item in items if INTEGRATION_TESTS_DIR in Path(str(item.fspath)).parents
    ]
    if not integration_items or docker_is_available():
        return
    skip_docker = pytest.mark.skip(reason="no docker daemon is reachable")
    for item in integration_items:
        item.add_marker(skip_docker)
