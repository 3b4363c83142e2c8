"""
Sailhouse - Python SDK for the Sailhouse event platform.
"""

__version__ = "0.1.0"

from .admin import AdminClient
from .client import SOURCE, SailhouseClient
from .config import Settings
from .events import Event, GetEventsResponse
from .exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    SailhouseError,
    TransportError,
    UnexpectedStatusError,
    WaitGroupError,
    WaitGroupStage,
)
from .models import (
    FilterOption,
    PublishOptions,
    PublishResponse,
    RegisterResult,
    WaitEvent,
    WaitGroupInstance,
    WaitOptions,
)

__all__ = [
    "__version__",
    # Clients
    "SailhouseClient",
    "AdminClient",
    "Settings",
    "SOURCE",
    # Models
    "Event",
    "GetEventsResponse",
    "PublishOptions",
    "PublishResponse",
    "WaitEvent",
    "WaitOptions",
    "WaitGroupInstance",
    "FilterOption",
    "RegisterResult",
    # Errors
    "SailhouseError",
    "ConfigurationError",
    "TransportError",
    "UnexpectedStatusError",
    "DecodeError",
    "EncodeError",
    "WaitGroupError",
    "WaitGroupStage",
]
