import io
import os
import tarfile
import time
from typing import Dict, List

from docker.models.containers import Container
from tenacity import RetryError, retry, retry_if_result, stop, wait

from strimzi_test_container.exceptions import (
    ListenerConfigurationError,
    StarterScriptCopyError,
)
from strimzi_test_container.logger import logger


def make_single_file_tar(path: str, content: bytes, mode: int = 0o700) -> bytes:
    """builds an in-memory tar archive holding a single file, the format
    docker expects when copying files into a container."""
    archive = io.BytesIO()
    with tarfile.open(fileobj=archive, mode="w") as tar:
        info = tarfile.TarInfo(name=os.path.basename(path))
        info.size = len(content)
        info.mode = mode
        info.mtime = int(time.time())
        tar.addfile(info, io.BytesIO(content))
    return archive.getvalue()


def copy_file_to_container(
    container: Container, content: bytes, path: str, mode: int = 0o700
):
    """copies the given content into the (running) container at path."""
    directory = os.path.dirname(path) or "/"
    archive = make_single_file_tar(path, content, mode=mode)
    if not container.put_archive(directory, archive):
        raise StarterScriptCopyError(
            f"docker refused to copy {path} into container {container.short_id}"
        )


def get_network_ip_addresses(container: Container) -> Dict[str, str]:
    """network name -> ip address, in the order the runtime reports them.

    Networks without an address yet are left out.
    """
    container.reload()
    networks = container.attrs.get("NetworkSettings", {}).get("Networks") or {}
    return {
        name: settings["IPAddress"]
        for name, settings in networks.items()
        if settings and settings.get("IPAddress")
    }


def wait_for_network_ip_addresses(container: Container, timeout: float) -> List[str]:
    """the addresses are assigned asynchronously after the container starts,
    polls until at least one is reported."""
    retry_config = dict(
        retry=retry_if_result(lambda addresses: not addresses),
        stop=stop.stop_after_delay(timeout),
        wait=wait.wait_fixed(0.1),
    )
    attempt = retry(**retry_config)(get_network_ip_addresses)
    try:
        addresses = attempt(container)
    except RetryError as e:
        raise ListenerConfigurationError(
            f"container {container.short_id} reported no network address within {timeout} seconds"
        ) from e
    logger.debug(
        "Container {container} network addresses: {addresses}",
        container=container.short_id,
        addresses=addresses,
    )
    return list(addresses.values())
