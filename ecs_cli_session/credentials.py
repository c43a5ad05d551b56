"""Credential sources for the sessions built by this package.

Two pieces live here:

* a verbose variant of botocore's credential chain that, instead of quietly
  returning nothing, raises ``CredentialResolutionError`` naming every
  provider it consulted;
* deferred, automatically refreshed credentials obtained by assuming an IAM
  role through another session.

Both resolve lazily: nothing is looked up until the first signed request
(or an explicit ``get_credentials()``).
"""

import socket
import time

import boto3
import botocore.session
import structlog
from botocore.credentials import CredentialResolver, DeferredRefreshableCredentials, create_credential_resolver
from botocore.exceptions import BotoCoreError, ClientError

from .config import SessionConfig
from .errors import CredentialResolutionError

logger = structlog.get_logger(__name__)

#: Credential method reported by assumed-role credentials
ASSUME_ROLE_METHOD = "sts-assume-role"

# IAM RoleSessionName limit
_MAX_SESSION_NAME_LENGTH = 64


class VerboseCredentialResolver(CredentialResolver):
    """Credential chain that reports every provider it tried.

    Same ordering and provider semantics as botocore's resolver; the only
    difference is that an exhausted chain raises instead of returning None.
    """

    def load_credentials(self):
        tried = []
        for provider in self.providers:
            tried.append(provider.METHOD)
            creds = provider.load()
            if creds is not None:
                logger.debug("Credentials resolved", method=provider.METHOD)
                return creds

        logger.error("No credential provider returned credentials", providers=tried)
        raise CredentialResolutionError(providers=", ".join(tried))


def use_verbose_credential_chain(core_session: botocore.session.Session) -> None:
    """Swap the session's credential chain for ``VerboseCredentialResolver``.

    The chain is still built lazily, so profile and config errors surface on
    first use rather than here.
    """

    def build_resolver() -> VerboseCredentialResolver:
        region = core_session.get_config_variable("region")
        default_resolver = create_credential_resolver(core_session, region_name=region)
        return VerboseCredentialResolver(default_resolver.providers)

    core_session.lazy_register_component("credential_provider", build_resolver)


def generate_session_name(prefix: str) -> str:
    """Generate unique session name for role assumption.

    Session names include hostname info for CloudTrail auditing.

    Args:
        prefix: Leading part of the name, e.g. "ecs-cli"

    Returns:
        Session name in format: "{prefix}-{hostname}-{timestamp}", at most 64 chars
    """
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = "unknown"

    # Session names only allow [\w+=,.@-]
    hostname = "".join(c if c.isalnum() or c in "+=,.@_-" else "-" for c in hostname) or "unknown"

    timestamp = str(int(time.time()))
    budget = _MAX_SESSION_NAME_LENGTH - len(prefix) - len(timestamp) - 2
    hostname = hostname[: max(budget, 0)]

    if not hostname:
        return f"{prefix}-{timestamp}"[:_MAX_SESSION_NAME_LENGTH]
    return f"{prefix}-{hostname}-{timestamp}"


def assume_role_credentials(
    source_session: boto3.Session,
    role_arn: str,
    region: str,
    config: SessionConfig,
) -> DeferredRefreshableCredentials:
    """Build credentials that assume ``role_arn`` through ``source_session``.

    STS is not called until the credentials are first used; botocore calls
    the refresh function again shortly before they expire.

    Args:
        source_session: Session whose identity assumes the role
        role_arn: ARN of IAM role to assume
        region: Region of the STS endpoint
        config: Session settings (session name prefix, duration)

    Returns:
        Deferred refreshable credentials for the assumed role
    """
    sts_client = None

    def refresh_credentials() -> dict:
        """Assume the role and return credentials in botocore metadata form."""
        nonlocal sts_client
        if sts_client is None:
            sts_client = source_session.client("sts", region_name=region)

        session_name = generate_session_name(config.role_session_prefix)
        logger.debug("Assuming IAM role", role_arn=role_arn, session_name=session_name)

        try:
            response = sts_client.assume_role(
                RoleArn=role_arn,
                RoleSessionName=session_name,
                DurationSeconds=config.role_duration_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Failed to assume role",
                role_arn=role_arn,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        credentials = response["Credentials"]
        logger.info(
            "Role assumed successfully",
            role_arn=role_arn,
            expires_at=credentials["Expiration"].isoformat(),
        )
        return {
            "access_key": credentials["AccessKeyId"],
            "secret_key": credentials["SecretAccessKey"],
            "token": credentials["SessionToken"],
            "expiry_time": credentials["Expiration"].isoformat(),
        }

    return DeferredRefreshableCredentials(refresh_using=refresh_credentials, method=ASSUME_ROLE_METHOD)
