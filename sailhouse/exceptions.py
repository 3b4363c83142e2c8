"""
Exceptions raised by the Sailhouse SDK.

Every error surfaced by the client derives from ``SailhouseError`` so callers
can catch the whole family with a single ``except`` clause, or pick out the
specific failure they care about:

- TransportError: the request never produced a response
- UnexpectedStatusError: the service answered with the wrong status code
- DecodeError: the response (or an event payload) had an unexpected shape
- EncodeError: a request body could not be encoded as JSON
- WaitGroupError: a wait-group run failed partway through
"""
from enum import Enum
from typing import Optional


class SailhouseError(Exception):
    """Base class for all Sailhouse SDK errors."""


class ConfigurationError(SailhouseError):
    """Raised when the client cannot be built from the supplied settings."""


class TransportError(SailhouseError, ConnectionError):
    """
    The HTTP request could not be sent or the connection failed.

    The underlying ``httpx`` exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class UnexpectedStatusError(SailhouseError):
    """
    A response was received, but its status code is not the one the operation
    treats as success.

    Attributes:
        operation: Name of the SDK operation (e.g. "publish")
        status_code: Status code returned by the service
        expected: Human-readable description of the accepted status(es)
        body: Response body text, useful for diagnostics
    """

    def __init__(self, operation: str, status_code: int, expected: str, body: str = ""):
        self.operation = operation
        self.status_code = status_code
        self.expected = expected
        self.body = body
        message = f"{operation}: expected status {expected}, got {status_code}"
        if body:
            message = f"{message} - {body}"
        super().__init__(message)


class DecodeError(SailhouseError, ValueError):
    """A response body or event payload did not match the expected shape."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class EncodeError(SailhouseError, ValueError):
    """A request body (usually an event payload) could not be encoded as JSON."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class WaitGroupStage(str, Enum):
    """Step of the wait-group protocol at which a run failed."""
    SETUP = "setup"
    PUBLISH = "publish"
    COMPLETION = "completion"


class WaitGroupError(SailhouseError):
    """
    A wait-group run failed.

    The stage tells the caller how much reached the service:

    - SETUP: the instance was never created and nothing was published.
    - PUBLISH: events before ``index`` were published under
      ``wait_group_instance_id``; the instance was never completed.
    - COMPLETION: every event was published, but the instance may never be
      marked complete.

    The underlying SDK error is chained as ``__cause__``.
    """

    def __init__(
        self,
        stage: WaitGroupStage,
        message: str,
        wait_group_instance_id: Optional[str] = None,
        index: Optional[int] = None,
        published: int = 0,
    ):
        self.stage = stage
        self.wait_group_instance_id = wait_group_instance_id
        self.index = index
        self.published = published
        super().__init__(f"wait group {stage.value} failed: {message}")

    @property
    def events_published(self) -> bool:
        """True when at least one event reached the service before the failure."""
        return self.published > 0
