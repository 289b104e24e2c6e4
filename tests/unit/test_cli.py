"""Unit tests for the endpoint-url command line."""

from __future__ import annotations

import logging
import subprocess
import sys
import typing as typ

import pytest

from endpoint_url import cli
from endpoint_url.config import EndpointDefaults

if typ.TYPE_CHECKING:
    import pathlib

    import pytest_mock


@pytest.fixture(autouse=True)
def isolated_config_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path
) -> pathlib.Path:
    """Keep the user's real config file out of CLI tests."""
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv(cli.ENV_DEBUG, raising=False)
    return config_home


def _run(argv: list[str], capsys: pytest.CaptureFixture[str]) -> tuple[int, str]:
    code = cli.main(argv)
    return code, capsys.readouterr().out.strip()


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        (["make"], "http://localhost:9200"),
        (["make", "localhost/mypath"], "http://localhost:9200/mypath"),
        (["make", "2001:db8::1", "--port", "5601"], "http://[2001:db8::1]:5601"),
        (
            ["make", "http://localhost/test", "--scheme", "https", "--path", "/hello"],
            "http://localhost:9200/test",
        ),
        (
            ["make", "192.156.4.5", "--scheme", "https", "--path", "/hello"],
            "https://192.156.4.5:9200/hello",
        ),
        (["parse", "host:1234/path"], "http://host:1234/path"),
        (
            ["parse", "host:1234/path", "--default-scheme", "https"],
            "https://host:1234/path",
        ),
        (
            ["encode", "http://localhost", "dashboard=first", "dashboard=second"],
            "http://localhost?dashboard=first&dashboard=second",
        ),
        (["encode", "http://localhost"], "http://localhost"),
    ],
)
def test_cli_commands(
    argv: list[str], expected: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Each command prints the resulting URL."""
    code, output = _run(argv, capsys)
    assert code == 0
    assert output == expected


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["make", "foobar:port"], "Cannot parse endpoint 'foobar:port'"),
        (["parse", "foobar:port"], "Cannot parse endpoint 'foobar:port'"),
        (["parse", ""], "Endpoint is empty"),
        (["make", "localhost", "--port", "70000"], "Invalid port 70000"),
        (["encode", "http://localhost", "dashboard"], "must be written as key=value"),
    ],
)
def test_cli_reports_errors(
    argv: list[str], message: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Endpoint errors are printed with the program prefix and exit 1."""
    code, output = _run(argv, capsys)
    assert code == 1
    assert output.startswith("endpoint-url: ")
    assert message in output


def test_make_uses_config_defaults(
    isolated_config_home: pathlib.Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Defaults come from the config file when options are omitted."""
    config_path = isolated_config_home / "endpoint-url" / "config.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        "endpoint:\n  default_scheme: https\n  default_port: 5601\n",
        encoding="utf-8",
    )
    code, output = _run(["make", "kibana.local"], capsys)
    assert code == 0
    assert output == "https://kibana.local:5601"

    code, output = _run(["make", "kibana.local", "--port", "80"], capsys)
    assert output == "https://kibana.local:80"


def test_make_passes_explicit_config_path(
    mocker: pytest_mock.MockerFixture,
    tmp_path: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--config selects the defaults file."""
    config_path = tmp_path / "custom.yaml"
    loader = mocker.patch.object(
        cli,
        "load_defaults",
        return_value=EndpointDefaults(default_path="/app", default_port=443),
    )
    code, output = _run(["make", "example.com", "--config", str(config_path)], capsys)
    assert code == 0
    assert output == "http://example.com:443/app"
    loader.assert_called_once_with(config_path)


def test_debug_flag_configures_logging(
    monkeypatch: pytest.MonkeyPatch,
    mocker: pytest_mock.MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """ENDPOINT_URL_DEBUG turns on debug logging."""
    monkeypatch.setenv(cli.ENV_DEBUG, "yes")
    basic_config = mocker.patch.object(logging, "basicConfig")
    code, _ = _run(["make", "localhost"], capsys)
    assert code == 0
    basic_config.assert_called_once_with(level=logging.DEBUG)


def test_module_entrypoint_runs() -> None:
    """`python -m endpoint_url` runs the CLI."""
    completed = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "endpoint_url", "make", "[::1]:80/hello"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert completed.returncode == 0, completed.stdout + completed.stderr
    assert completed.stdout.strip() == "http://[::1]:80/hello"
