#!/usr/bin/env python3
"""
Session CLI

Command-line interface for checking which AWS identity the session
constructors resolve to, without writing any code.

Commands:
    identity        Print the caller identity of a session
    show-config     Print the effective session configuration

Usage:
    python -m ecs_cli_session identity [--profile NAME | --role-arn ARN] [--region REGION]
    python -m ecs_cli_session show-config

Module: cli
"""

import json
import os
import sys
from typing import Any, Optional

import click
from dotenv import load_dotenv

from . import session as aws_session
from .config import SessionConfig
from .logs import configure_logging
from .version import __version__

#: STS region used when the session itself has none
FALLBACK_STS_REGION = "us-east-1"


def format_json(data: Any, pretty: bool = True) -> str:
    """Format data as JSON string"""
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Handle and format errors"""
    if verbose:
        click.echo(f"Error: {type(error).__name__}: {error}", err=True)
        import traceback

        traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def build_session(profile: Optional[str], role_arn: Optional[str], region: Optional[str], config: SessionConfig):
    """Pick the session constructor matching the given options."""
    if role_arn:
        return aws_session.from_role(role_arn, region, config=config)
    if profile:
        return aws_session.from_profile(profile, config=config, region=region)
    if region:
        return aws_session.default_with_region(region, config=config)
    return aws_session.default(config=config)


@click.group()
@click.version_option(version=__version__, prog_name="ecs-cli-session")
@click.option(
    "--log-level",
    default=lambda: os.getenv("LOG_LEVEL", "INFO"),
    help="Log level (default: $LOG_LEVEL or INFO)",
)
def cli(log_level: str):
    """
    AWS session helper

    Builds sessions the same way the library does (default chain, named
    profile, pinned region or assumed role) and reports what they resolve to.
    """
    load_dotenv()
    configure_logging(log_level)


@cli.command()
@click.option("--profile", "-p", default=None, help="Shared-config profile to use")
@click.option("--role-arn", default=None, help="IAM role to assume through the default session")
@click.option("--region", "-r", default=None, help="Region to pin the session to (required with --role-arn)")
@click.option("--pretty/--compact", default=True, help="Pretty print JSON output", show_default=True)
@click.option("--verbose", "-v", is_flag=True, help="Verbose error output")
def identity(profile: Optional[str], role_arn: Optional[str], region: Optional[str], pretty: bool, verbose: bool):
    """
    Print the AWS caller identity of a session

    Examples:
        ecs-cli-session identity
        ecs-cli-session identity --profile prod
        ecs-cli-session identity --role-arn arn:aws:iam::123456789012:role/Deploy --region us-west-2
    """
    if profile and role_arn:
        raise click.UsageError("--profile and --role-arn are mutually exclusive")
    if role_arn and not region:
        raise click.UsageError("--role-arn requires --region")

    try:
        config = SessionConfig.from_env()
        sess = build_session(profile, role_arn, region, config)

        sts = sess.client("sts", region_name=sess.region_name or FALLBACK_STS_REGION)
        caller = sts.get_caller_identity()
        credentials = sess.get_credentials()

        click.echo(
            format_json(
                {
                    "account": caller["Account"],
                    "arn": caller["Arn"],
                    "user_id": caller["UserId"],
                    "region": sess.region_name,
                    "credential_method": getattr(credentials, "method", None),
                },
                pretty=pretty,
            )
        )

    except Exception as e:
        handle_error(e, verbose)


@cli.command("show-config")
@click.option("--pretty/--compact", default=True, help="Pretty print JSON output", show_default=True)
@click.option("--verbose", "-v", is_flag=True, help="Verbose error output")
def show_config(pretty: bool, verbose: bool):
    """
    Print the effective session configuration

    Values come from ECS_CLI_* environment variables, falling back to defaults.
    """
    try:
        config = SessionConfig.from_env()
        data = config.model_dump()
        data["user_agent_token"] = config.user_agent_token
        click.echo(format_json(data, pretty=pretty))

    except Exception as e:
        handle_error(e, verbose)


if __name__ == "__main__":
    cli()
