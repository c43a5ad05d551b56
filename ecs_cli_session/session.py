"""Functions that return AWS sessions to use with boto3.

Each call builds a fresh ``boto3.Session`` tagged with the tool's user-agent
handler. Nothing is cached between calls and no process-wide state is
touched. Credential problems surface when the session is first used, except
for ``from_role`` which needs a working default session up front.

Usage:
    from ecs_cli_session import session

    sess = session.from_profile("prod")
    ecs = sess.client("ecs")
"""

from typing import Optional

import boto3
import botocore.session
import structlog
from botocore.credentials import Credentials

from .config import SessionConfig
from .credentials import assume_role_credentials, use_verbose_credential_chain
from .errors import SessionConstructionError
from .handlers import push_back_user_agent_handler

logger = structlog.get_logger(__name__)


def _resolve_config(config: Optional[SessionConfig]) -> SessionConfig:
    return config if config is not None else SessionConfig.from_env()


def _new_session(
    config: SessionConfig,
    region: Optional[str] = None,
    profile: Optional[str] = None,
    credentials: Optional[Credentials] = None,
) -> boto3.Session:
    core_session = botocore.session.get_session()
    if credentials is not None:
        core_session._credentials = credentials
    elif config.verbose_credential_errors:
        use_verbose_credential_chain(core_session)

    session = boto3.Session(botocore_session=core_session, region_name=region)

    # Set after construction: boto3 reads the shared config while setting up
    # its loader, and a missing profile must not fail until first use.
    if profile is not None:
        core_session.set_config_variable("profile", profile)

    push_back_user_agent_handler(session, config)
    return session


def default(config: Optional[SessionConfig] = None) -> boto3.Session:
    """Return a session configured against the default credential chain.

    Environment variables, shared credentials/config files and container or
    instance roles are consulted on first use.
    """
    config = _resolve_config(config)
    logger.debug("Creating default session", verbose_credential_errors=config.verbose_credential_errors)
    return _new_session(config)


def default_with_region(region: str, config: Optional[SessionConfig] = None) -> boto3.Session:
    """Return a session configured against the default credential chain and ``region``.

    ``region`` is not validated; an unknown region fails when a request is made.
    """
    config = _resolve_config(config)
    logger.debug("Creating default session", region=region)
    return _new_session(config, region=region)


def from_profile(
    name: str, config: Optional[SessionConfig] = None, region: Optional[str] = None
) -> boto3.Session:
    """Return a session configured against the named shared-config profile.

    A missing or malformed profile raises on first use, not here. ``region``
    overrides the profile's region when given.
    """
    config = _resolve_config(config)
    logger.debug("Creating session from profile", profile=name, region=region)
    return _new_session(config, region=region, profile=name)


def from_role(role_arn: str, region: str, config: Optional[SessionConfig] = None) -> boto3.Session:
    """Return a session that assumes ``role_arn`` and is pinned to ``region``.

    The role is assumed through the default session. Its credentials are
    fetched on first use and refreshed automatically before they expire.

    Raises:
        SessionConstructionError: If the default session cannot be created
    """
    config = _resolve_config(config)
    try:
        default_session = default(config)
    except Exception as e:
        logger.error(
            "Failed to create default session for role assumption",
            role_arn=role_arn,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise SessionConstructionError(f"error creating default session: {e}") from e

    credentials = assume_role_credentials(default_session, role_arn, region, config)
    logger.debug("Creating session from role", role_arn=role_arn, region=region)
    return _new_session(config, region=region, credentials=credentials)
