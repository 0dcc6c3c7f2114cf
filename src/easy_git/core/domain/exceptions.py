"""Domain exceptions for easy_git.

Every exception carries a human-readable message; ``str(exc)`` is the error
text surfaced to the caller.
"""

from __future__ import annotations


class EasyGitError(Exception):
    """Base class for all easy_git failures."""


class InvalidRepositoryNameError(EasyGitError, ValueError):
    """Owner or repository name that GitHub would not accept.

    Such names never reach the filesystem or the remote URL.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid repository name: {name!r}")


class ProcessLaunchError(EasyGitError):
    """Raised when an external command could not be started at all.

    Distinct from a command that ran and exited non-zero.
    """

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to launch {command}: {reason}")


class CommandFailedError(EasyGitError):
    """Raised when a command ran and exited non-zero."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message)


class RevertFailedError(EasyGitError):
    """Raised when a stage of the temp-clone revert pipeline failed."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(message)


class NetworkError(EasyGitError):
    """Bind, connect or send failure."""


class ListenerBindError(NetworkError):
    def __init__(self, port: int, reason: str = "") -> None:
        self.port = port
        message = f"Could not listen on port {port}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ProtocolError(EasyGitError):
    """A remote party answered with something we cannot accept."""


class CallbackMalformedError(ProtocolError):
    def __init__(self, missing: str) -> None:
        self.missing = missing
        super().__init__(f"OAuth callback is malformed: missing '{missing}' parameter")


class StateMismatchError(ProtocolError):
    def __init__(self) -> None:
        super().__init__(
            "OAuth state mismatch: the callback may be forged. Please try logging in again."
        )


class TokenExchangeError(ProtocolError):
    """Token endpoint rejected the exchange. Message is the response body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TokenResponseParseError(ProtocolError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to parse token response: {reason}")


class GitHubAPIError(ProtocolError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(EasyGitError):
    pass


class MissingCredentialError(ConfigurationError):
    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"Environment variable {variable} is not set")
