"""Command-line interface for PromptGate.

Evaluates time window access for a user against a JSON membership file and
validates window definitions before they are stored.
"""

import asyncio
import dataclasses
import json
import sys
from typing import NoReturn

import click

from promptgate import __version__
from promptgate.application.services import TimeWindowAccessService
from promptgate.core.config import get_settings
from promptgate.core.exceptions import MembershipLookupError
from promptgate.core.logging import configure_logging
from promptgate.domain.entities import AccessPolicy
from promptgate.domain.services import WindowValidator
from promptgate.infrastructure.providers import JsonFileMembershipProvider, load_document


@click.group()
@click.version_option(version=__version__, prog_name="PromptGate")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default="WARNING",
    help="Set log level",
)
def cli(log_level: str) -> None:
    """PromptGate - time window access control for prompt submission."""
    settings = get_settings().model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command()
@click.argument("user_id")
@click.option(
    "--groups-file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="JSON file with groups and memberships",
)
@click.option("--now", "now", default=None, help="Evaluation instant (ISO-8601, default: current time)")
@click.option(
    "--allow-no-groups/--deny-no-groups",
    default=None,
    help="Decision for users without groups (overrides config)",
)
@click.option(
    "--allow-no-windows/--deny-no-windows",
    default=None,
    help="Decision for groups without active windows (overrides config)",
)
@click.option(
    "--honor-timezones/--utc",
    default=None,
    help="Evaluate windows in their own timezone (overrides config)",
)
def check(
    user_id: str,
    groups_file: str,
    now: str | None,
    allow_no_groups: bool | None,
    allow_no_windows: bool | None,
    honor_timezones: bool | None,
) -> None:
    """Check whether USER_ID may send prompts.

    Prints the decision as JSON and exits with 0 when allowed, 1 when denied.
    """
    settings = get_settings()
    policy = AccessPolicy.from_settings(settings)
    overrides = {
        "default_allow_when_no_groups": allow_no_groups,
        "default_allow_when_no_time_windows": allow_no_windows,
        "honor_window_timezones": honor_timezones,
    }
    policy = dataclasses.replace(policy, **{k: v for k, v in overrides.items() if v is not None})

    service = TimeWindowAccessService(JsonFileMembershipProvider(groups_file), settings=settings)
    decision = asyncio.run(service.check_time_window_access(user_id, policy=policy, now=now))

    click.echo(json.dumps(decision.to_dict()))
    if not decision.is_allowed:
        sys.exit(1)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def validate(path: str) -> None:
    """Validate every time window defined in PATH."""
    try:
        document = load_document(path)
    except MembershipLookupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    checked = 0
    failed = False
    for group in document.get("groups", []):
        if not isinstance(group, dict):
            continue
        group_label = group.get("name") or group.get("id") or "<unnamed group>"
        for index, window in enumerate(group.get("timeWindows") or []):
            checked += 1
            if not isinstance(window, dict):
                failed = True
                click.echo(f"{group_label} / #{index}: window must be an object")
                continue
            window_label = window.get("name") or f"#{index}"
            for error in WindowValidator.validate(window):
                failed = True
                click.echo(f"{group_label} / {window_label}: {error.field}: {error.message} [{error.code}]")

    if failed:
        sys.exit(1)
    click.echo(f"All {checked} time windows are valid.")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()
