from unittest import mock

import pytest


@pytest.fixture(autouse=True)
def docker_client():
    """no docker daemon is needed to configure containers and networks."""
    with mock.patch("testcontainers.core.container.DockerClient") as client, mock.patch(
        "testcontainers.core.network.DockerClient"
    ):
        yield client
