from unittest import mock

import pytest
import typer
from typer.testing import CliRunner

from strimzi_test_container import versions
from strimzi_test_container.cli import app, parse_configuration

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_log_configuration():
    with mock.patch("strimzi_test_container.cli.configure_logs"):
        yield


def test_versions_command():
    result = runner.invoke(app, ["versions"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[-1] == f"{versions.get_latest_kafka_version()} *"
    assert lines[:-1] == versions.get_supported_kafka_versions()[:-1]


def test_image_command():
    result = runner.invoke(app, ["image"])

    assert result.exit_code == 0
    assert result.output.strip() == versions.get_image_name()


def test_image_command_unsupported_version():
    result = runner.invoke(app, ["image", "--kafka-version", "0.9.0"])

    assert result.exit_code == 1


def test_run_command_rejects_malformed_configuration():
    result = runner.invoke(app, ["run", "--config", "no-separator"])

    assert result.exit_code != 0


def test_parse_configuration():
    assert parse_configuration(["a=1", "b.c = x=y", "empty="]) == {
        "a": "1",
        "b.c": " x=y",
        "empty": "",
    }
    assert parse_configuration(None) == {}
    with pytest.raises(typer.BadParameter):
        parse_configuration(["=1"])
