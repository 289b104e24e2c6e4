"""Behavioural tests for the endpoint-url command line."""

from __future__ import annotations

import dataclasses
import io
import shlex
from contextlib import redirect_stdout

from pytest_bdd import parsers, scenarios, then, when

from endpoint_url import cli

scenarios("features/cli.feature")


@dataclasses.dataclass
class RunResult:
    """Record CLI invocation results."""

    stdout: str
    returncode: int


@when(parsers.cfparse('I run endpoint-url with "{arguments}"'))
def when_run_cli(arguments: str, cli_invocation: dict[str, RunResult]) -> None:
    """Run the CLI in-process and capture its output."""
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        code = cli.main(shlex.split(arguments))
    cli_invocation["result"] = RunResult(stdout=buffer.getvalue(), returncode=code)


@then("the command succeeds")
def then_command_succeeds(cli_invocation: dict[str, RunResult]) -> None:
    """The CLI exited with status 0."""
    result = cli_invocation["result"]
    assert result.returncode == 0, result.stdout


@then("the command fails")
def then_command_fails(cli_invocation: dict[str, RunResult]) -> None:
    """The CLI exited with status 1."""
    assert cli_invocation["result"].returncode == 1


@then(parsers.cfparse('the output is "{expected}"'))
def then_output_is(expected: str, cli_invocation: dict[str, RunResult]) -> None:
    """Compare the printed URL."""
    assert cli_invocation["result"].stdout.strip() == expected


@then(parsers.cfparse('the output mentions "{fragment}"'))
def then_output_mentions(fragment: str, cli_invocation: dict[str, RunResult]) -> None:
    """Check the printed error message."""
    assert fragment in cli_invocation["result"].stdout
