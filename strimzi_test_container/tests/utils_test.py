import io
import tarfile
from unittest import mock

import pytest

from strimzi_test_container.exceptions import (
    ListenerConfigurationError,
    StarterScriptCopyError,
)
from strimzi_test_container.utils import (
    copy_file_to_container,
    get_network_ip_addresses,
    make_single_file_tar,
    wait_for_network_ip_addresses,
)


def make_container(*network_snapshots):
    """a docker container whose reported networks change on every reload."""
    container = mock.MagicMock()
    container.short_id = "0123456789ab"
    snapshots = iter(network_snapshots)

    def reload():
        container.attrs = {"NetworkSettings": {"Networks": next(snapshots)}}

    container.reload.side_effect = reload
    return container


def test_single_file_tar():
    archive = make_single_file_tar("/some/dir/start.sh", b"#!/bin/bash\n", mode=0o755)

    with tarfile.open(fileobj=io.BytesIO(archive)) as tar:
        (member,) = tar.getmembers()
        assert member.name == "start.sh"
        assert member.mode == 0o755
        assert member.size == len(b"#!/bin/bash\n")
        assert tar.extractfile(member).read() == b"#!/bin/bash\n"


def test_copy_file_to_container():
    container = mock.MagicMock()
    container.put_archive.return_value = True

    copy_file_to_container(container, b"echo", "/opt/kafka/start.sh")

    directory, _ = container.put_archive.call_args[0]
    assert directory == "/opt/kafka"


def test_copy_file_to_container_refused():
    container = mock.MagicMock()
    container.put_archive.return_value = False

    with pytest.raises(StarterScriptCopyError):
        copy_file_to_container(container, b"echo", "/start.sh")


def test_network_ip_addresses_keep_runtime_order():
    container = make_container(
        {
            "tests": {"IPAddress": "172.20.0.4"},
            "bridge": {"IPAddress": "172.17.0.2"},
            "none": {"IPAddress": ""},
        }
    )

    assert get_network_ip_addresses(container) == {
        "tests": "172.20.0.4",
        "bridge": "172.17.0.2",
    }


def test_wait_for_network_ip_addresses_polls():
    container = make_container({}, {"bridge": {"IPAddress": ""}}, {"bridge": {"IPAddress": "172.17.0.2"}})

    assert wait_for_network_ip_addresses(container, timeout=5) == ["172.17.0.2"]
    assert container.reload.call_count == 3


def test_wait_for_network_ip_addresses_timeout():
    container = mock.MagicMock()
    container.attrs = {"NetworkSettings": {"Networks": {}}}

    with pytest.raises(ListenerConfigurationError):
        wait_for_network_ip_addresses(container, timeout=0.3)
