from .app.main import (
    revert_in_place,
    revert_via_temp_clone,
    oauth_login,
    whoami,
    list_repos,
    list_commits,
    show_commit,
)
from .core.domain.exceptions import EasyGitError

__all__ = [
    "revert_in_place",
    "revert_via_temp_clone",
    "oauth_login",
    "whoami",
    "list_repos",
    "list_commits",
    "show_commit",
    "EasyGitError",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
