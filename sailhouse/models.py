"""
Pydantic DTOs for the Sailhouse API.

These models describe the request options and response bodies exchanged with
the Sailhouse service. Response models ignore fields they do not declare, so
the SDK keeps working when the service adds new ones.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """
    Base configuration for all DTOs.

    - Unknown fields in incoming payloads are ignored.
    - Allows population by field name in Python code.
    """
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


# =============================================================================
# Publishing
# =============================================================================


class PublishOptions(BaseDTO):
    """Optional envelope fields for a single publish call."""
    model_config = ConfigDict(frozen=True)

    metadata: Optional[Dict[str, str]] = Field(
        default=None,
        description="String key/value metadata delivered alongside the event."
    )
    send_at: Optional[datetime] = Field(
        default=None,
        description="Scheduled delivery time. Delivered immediately when omitted."
    )
    wait_group_instance_id: Optional[str] = Field(
        default=None,
        description="Wait-group instance the event belongs to."
    )


class PublishResponse(BaseDTO):
    """Response after publishing an event."""
    id: str = Field(..., description="Server-assigned event identifier.")


# =============================================================================
# Wait groups
# =============================================================================


class WaitEvent(BaseDTO):
    """One event to publish as part of a wait group."""
    topic: str = Field(..., description="Topic this event is published to.")
    body: Any = Field(..., description="Event payload.")
    metadata: Optional[Dict[str, str]] = Field(default=None, description="Optional event metadata.")
    send_at: Optional[datetime] = Field(default=None, description="Optional scheduled delivery time.")

    def publish_options(self, wait_group_instance_id: str) -> PublishOptions:
        """Options for publishing this event under the given instance."""
        return PublishOptions(
            metadata=self.metadata,
            send_at=self.send_at,
            wait_group_instance_id=wait_group_instance_id,
        )


class WaitOptions(BaseDTO):
    """Options for a wait-group run."""
    ttl: Optional[str] = Field(
        default=None,
        description="Time window after which the service expires the instance (e.g. '5m')."
    )


class WaitGroupInstanceResponse(BaseDTO):
    """Response after creating a wait-group instance."""
    wait_group_instance_id: str = Field(
        ...,
        min_length=1,
        description="Server-issued identifier of the new instance."
    )


class WaitGroupInstance(BaseDTO):
    """A wait-group instance for the duration of one run."""
    model_config = ConfigDict(frozen=True)

    topic: str
    ttl: Optional[str] = None
    wait_group_instance_id: str


# =============================================================================
# Admin
# =============================================================================


class FilterOption(BaseDTO):
    """Push-subscription filter: deliver only events whose ``path`` equals ``value``."""
    path: str = Field(..., description="Path into the event payload.")
    value: str = Field(..., description="Value the path must match.")


class RegisterResult(BaseDTO):
    """Response after registering a push subscription."""
    outcome: str = Field(..., description="One of 'created', 'updated' or 'none'.")
