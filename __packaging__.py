"""
strimzi-test-container - Kafka test fixtures on top of testcontainers

Launches a single-node Kafka broker (Strimzi image) inside a container for use in
integration tests, and exposes the broker's bootstrap address to the test code.
"""
import os

VERSION = (0, 1, 0)
VERSION_STRING = ".".join(map(str, VERSION))

__version__ = VERSION_STRING
__author__ = "Strimzi authors"
__license__ = "Apache 2.0"


def get_install_requires(here):
    """Gets the contents of install_requires from text file.

    The requirements in requires.txt are the minimum set of packages
    you need to run the test containers.
    """
    with open(os.path.join(here, "requires.txt")) as fp:
        return [
            line.strip()
            for line in fp.read().splitlines()
            if line.strip() and not line.startswith("#")
        ]
