class StrimziTestContainerError(Exception):
    """Base class for all errors raised by the Strimzi test containers."""


class UnsupportedKafkaVersionError(StrimziTestContainerError):
    def __init__(self, version: str, supported_versions):
        self.version = version
        self.supported_versions = list(supported_versions)
        super().__init__(
            f"Kafka version '{version}' is not supported, supported versions: {', '.join(self.supported_versions)}"
        )


class ContainerNotStartedError(StrimziTestContainerError):
    """The container must be started before its addresses are known."""


class ListenerConfigurationError(StrimziTestContainerError):
    """The listener configuration of the broker could not be computed."""


class StarterScriptCopyError(StrimziTestContainerError):
    """The starter script could not be copied into the container."""
