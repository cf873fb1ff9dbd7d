import time
from typing import Dict, List, Optional

import typer

from strimzi_test_container import versions
from strimzi_test_container.containers.kafka import StrimziKafkaContainer
from strimzi_test_container.exceptions import StrimziTestContainerError
from strimzi_test_container.logger import configure_logs

app = typer.Typer(
    help="Run single-node Kafka brokers from the Strimzi images, the way the test fixtures do."
)


def parse_configuration(entries: Optional[List[str]]) -> Dict[str, str]:
    """parses `key=value` entries into broker configuration overrides."""
    configuration = {}
    for entry in entries or []:
        name, separator, value = entry.partition("=")
        if not separator or not name.strip():
            raise typer.BadParameter(f"expected key=value, got '{entry}'")
        configuration[name.strip()] = value
    return configuration


@app.callback()
def main():
    configure_logs()


@app.command("versions")
def list_versions():
    """List the supported Kafka versions, the latest one marked with `*`."""
    latest = versions.get_latest_kafka_version()
    for version in versions.get_supported_kafka_versions():
        typer.echo(f"{version} *" if version == latest else version)


@app.command("image")
def show_image(
    kafka_version: Optional[str] = typer.Option(
        None, help="Kafka version of the image, the latest supported when omitted"
    ),
):
    """Print the name of the image a broker of the given version runs."""
    try:
        typer.echo(versions.get_image_name(kafka_version))
    except StrimziTestContainerError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("run")
def run(
    broker_id: int = typer.Option(1, help="broker.id of the Kafka broker"),
    kafka_version: Optional[str] = typer.Option(
        None, help="Kafka version to run, the latest supported when omitted"
    ),
    config: Optional[List[str]] = typer.Option(
        None,
        "--config",
        "-c",
        help="Additional broker configuration as `key=value`, can be repeated",
    ),
    external_zookeeper: Optional[str] = typer.Option(
        None, help="Connect string of an external ZooKeeper, an embedded one is started when omitted"
    ),
):
    """Start a Kafka broker, print its bootstrap servers and keep it running
    until interrupted."""
    configuration = parse_configuration(config)
    try:
        container = StrimziKafkaContainer.create_with_additional_configuration(
            broker_id,
            configuration,
            kafka_version=kafka_version,
            external_zookeeper_connect=external_zookeeper,
        )
    except StrimziTestContainerError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with container:
        typer.echo(container.get_bootstrap_servers())
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            typer.echo("Stopping the Kafka broker...", err=True)


if __name__ == "__main__":
    app()
