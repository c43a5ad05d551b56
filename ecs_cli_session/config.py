"""
Session configuration

Explicit configuration object handed to the session constructors in
``ecs_cli_session.session``. Nothing here is process-wide: callers build a
``SessionConfig`` (or let ``SessionConfig.from_env()`` read one) and pass it in.

Environment variables read by ``from_env``:
    ECS_CLI_TOOL_NAME                   Name in the user-agent token (default: aws-ecs-cli-v2)
    ECS_CLI_VERBOSE_CREDENTIAL_ERRORS   List every provider tried when no credentials are found (default: true)
    ECS_CLI_ROLE_SESSION_PREFIX         Prefix of assumed-role session names (default: ecs-cli)
    ECS_CLI_ROLE_DURATION_SECONDS       Lifetime of assumed-role credentials (default: 3600)

Module: config
"""

import os
import re
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .version import __version__

DEFAULT_TOOL_NAME = "aws-ecs-cli-v2"
DEFAULT_ROLE_SESSION_PREFIX = "ecs-cli"

# IAM RoleSessionName character set
_ROLE_SESSION_NAME_PATTERN = re.compile(r"^[\w+=,.@-]*$")

_TRUTHY = ("true", "1", "yes")


class SessionConfig(BaseModel):
    """Settings shared by every session this package builds."""

    model_config = ConfigDict(frozen=True)

    tool_name: str = Field(DEFAULT_TOOL_NAME, min_length=1, description="Tool name sent in the User-Agent header")
    tool_version: str = Field(__version__, min_length=1, description="Tool version sent in the User-Agent header")
    verbose_credential_errors: bool = Field(
        True, description="Report every credential provider consulted when the chain finds nothing"
    )
    role_session_prefix: str = Field(
        DEFAULT_ROLE_SESSION_PREFIX, max_length=32, description="Prefix for assumed-role session names"
    )
    role_duration_seconds: int = Field(
        3600, ge=900, le=43200, description="Requested lifetime of assumed-role credentials"
    )

    @field_validator("tool_name", "tool_version")
    @classmethod
    def validate_token_part(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError("must not contain whitespace")
        return v

    @field_validator("role_session_prefix")
    @classmethod
    def validate_role_session_prefix(cls, v: str) -> str:
        if not _ROLE_SESSION_NAME_PATTERN.match(v):
            raise ValueError("may only contain letters, digits and +=,.@_-")
        return v

    @property
    def user_agent_token(self) -> str:
        """Token appended to the User-Agent header, e.g. ``aws-ecs-cli-v2/1.0.0``."""
        return f"{self.tool_name}/{self.tool_version}"

    @classmethod
    def from_env(cls) -> "SessionConfig":
        """Build a config from ECS_CLI_* environment variables.

        Unset variables keep their defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        overrides: Dict[str, Any] = {}

        if tool_name := os.getenv("ECS_CLI_TOOL_NAME"):
            overrides["tool_name"] = tool_name

        verbose = os.getenv("ECS_CLI_VERBOSE_CREDENTIAL_ERRORS")
        if verbose is not None:
            overrides["verbose_credential_errors"] = verbose.strip().lower() in _TRUTHY

        if prefix := os.getenv("ECS_CLI_ROLE_SESSION_PREFIX"):
            overrides["role_session_prefix"] = prefix

        if duration := os.getenv("ECS_CLI_ROLE_DURATION_SECONDS"):
            overrides["role_duration_seconds"] = duration

        return cls(**overrides)
