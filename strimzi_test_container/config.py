from strimzi_test_container.confi import Confi, confi

_LOG_FORMAT = "<green>{time}</green> | <blue>{extra[short_name]: <40}</blue>|<level>{level:^6} | {message}</level>\n{exception}"


class StrimziTestContainerConfig(Confi):
    # Image resolution
    IMAGE_REPOSITORY = confi.str(
        "IMAGE_REPOSITORY",
        "quay.io/strimzi/kafka",
        description="Repository of the Strimzi Kafka image",
    )
    IMAGE_VERSION = confi.str(
        "IMAGE_VERSION",
        "0.28.0",
        description="Strimzi release the Kafka image was built by",
    )
    KAFKA_VERSION = confi.str(
        "KAFKA_VERSION",
        "",
        description="Kafka version to run, the latest supported version when empty",
    )
    # Startup
    STARTUP_TIMEOUT = confi.int(
        "STARTUP_TIMEOUT",
        120,
        description="Seconds to wait for a started container to report the broker is up",
    )
    NETWORK_DISCOVERY_TIMEOUT = confi.float(
        "NETWORK_DISCOVERY_TIMEOUT",
        10.0,
        description="Seconds to wait for the container runtime to report network addresses",
    )
    # Logging
    LOG_FORMAT = confi.str(
        "LOG_FORMAT", _LOG_FORMAT, description="The format of the log messages"
    )
    LOG_LEVEL = confi.str("LOG_LEVEL", "INFO", description="The log level to show")
    LOG_COLORIZE = confi.bool("LOG_COLORIZE", True, description="Colorize log messages")
    LOG_MODULE_EXCLUDE_LIST = confi.list(
        "LOG_MODULE_EXCLUDE_LIST",
        ["urllib3", "docker"],
        description="List of modules to exclude from logging",
    )
    LOG_MODULE_INCLUDE_LIST = confi.list(
        "LOG_MODULE_INCLUDE_LIST",
        [],
        description="List of modules to include in logging",
    )
    LOG_PATCH_THIRDPARTY_LOGS = confi.bool(
        "LOG_PATCH_THIRDPARTY_LOGS",
        True,
        description="Should we takeover the stdlib logs of testcontainers and docker so they appear in the main logger",
    )


strimzi_test_container_config = StrimziTestContainerConfig(
    prefix="STRIMZI_TEST_CONTAINER_"
)
