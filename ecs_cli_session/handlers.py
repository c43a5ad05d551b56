"""Request handlers attached to every session.

botocore builds each outgoing request and then emits ``request-created``;
handlers registered there run after the client's own user-agent rebuild and
before the request is sent. This is where the tool identifies itself.
"""

from typing import Callable

import boto3
import structlog

from .config import SessionConfig

logger = structlog.get_logger(__name__)

#: Event fired once per built request (per attempt)
BUILD_EVENT = "request-created"

#: Registration id; botocore ignores a second registration under the same id
USER_AGENT_HANDLER_ID = "ecs-cli-session.UserAgentHandler"


def make_user_agent_handler(token: str) -> Callable[..., None]:
    """Return a handler that appends ``token`` to a request's User-Agent header.

    Args:
        token: Value to append, e.g. ``aws-ecs-cli-v2/1.0.0``

    Returns:
        Handler suitable for the ``request-created`` event
    """

    def add_to_user_agent(request, **kwargs) -> None:
        current = request.headers.get("User-Agent")
        if current:
            request.headers.replace_header("User-Agent", f"{current} {token}")
        else:
            request.headers["User-Agent"] = token

    return add_to_user_agent


def push_back_user_agent_handler(session: boto3.Session, config: SessionConfig) -> None:
    """Register the user-agent handler at the end of the session's build stage.

    Clients created from ``session`` afterwards inherit the handler. Calling
    this more than once on the same session has no further effect.
    """
    session.events.register_last(
        BUILD_EVENT,
        make_user_agent_handler(config.user_agent_token),
        unique_id=USER_AGENT_HANDLER_ID,
    )
    logger.debug("User agent handler registered", token=config.user_agent_token)
