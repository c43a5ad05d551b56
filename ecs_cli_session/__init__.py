"""AWS session construction for the ECS command line.

This package returns boto3 sessions for the default credential chain, a
pinned region, a named profile or an assumed role, each tagged with the
tool's user-agent token.
"""

from .config import SessionConfig
from .errors import CredentialResolutionError, SessionConstructionError
from .session import default, default_with_region, from_profile, from_role
from .version import __version__

__all__ = [
    "CredentialResolutionError",
    "SessionConfig",
    "SessionConstructionError",
    "__version__",
    "default",
    "default_with_region",
    "from_profile",
    "from_role",
]
