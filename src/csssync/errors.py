"""Error hierarchy for csssync."""
from __future__ import annotations


class CSSSyncError(Exception):
    """Base error for all csssync errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigurationError(CSSSyncError):
    """Root path missing, not a directory, or unreadable."""


class ParseSkip(CSSSyncError):
    """A single stylesheet could not be read or parsed and was left out of the index."""

    def __init__(self, message: str, *, path: str = "", cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.path = path


class StaleIndexError(CSSSyncError):
    """The cached file or rule a patch targets is no longer in the index."""


class WriteFailure(CSSSyncError):
    """Writing a stylesheet back to disk failed."""

    def __init__(self, message: str, *, path: str = "", cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.path = path


class InvalidChangeEvent(CSSSyncError):
    """A change event is missing its selector or its changes."""


class NoPropertiesError(CSSSyncError):
    """A new rule would be created without any declarations."""


# ---------------------------------------------------------------------------
# Agent client errors
# ---------------------------------------------------------------------------


class AgentError(CSSSyncError):
    """The local agent answered with an error."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class AgentTimeoutError(AgentError):
    """The local agent did not answer in time."""


class AgentUnavailableError(AgentError):
    """The local agent could not be reached."""
