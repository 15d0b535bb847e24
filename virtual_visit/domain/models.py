"""
Domain models for virtual visit summaries.

These models represent what the virtual-care backend reports about a visit
that may be resumed. They use Pydantic for validation and immutability; every
model is a value object owned by the VisitSummary that contains it.
"""

from enum import Enum
from typing import assert_never

from pydantic import BaseModel, ConfigDict, Field

from virtual_visit.domain.errors import InvalidEnumValueError


class VisitStatus(str, Enum):
    """Status of a virtual visit, as sent on the wire."""

    REQUESTED = "requested"
    WAITING_ROOM = "waitingroom"
    IN_VISIT = "invisit"
    DONE = "done"
    CANCELLED = "cancelled"
    STAFF_DECLINED = "staffdeclined"  # declined before seeing a provider

    @property
    def wire_value(self) -> str:
        return self.value

    @classmethod
    def from_wire(cls, raw: str) -> "VisitStatus":
        """
        Decode a status wire string.

        Deprecated spellings are recognized only so they can be rejected with a
        message naming their replacement; they never map to a member.
        """
        if raw in _DEPRECATED_STATUS_SPELLINGS:
            raise InvalidEnumValueError(
                "status", raw, replacement=_DEPRECATED_STATUS_SPELLINGS[raw].value
            )
        try:
            return cls(raw)
        except ValueError:
            raise InvalidEnumValueError("status", raw) from None

    def is_active(self) -> bool:
        """
        Whether the visit can still be resumed.

        When this is False the visit has ended and a new one must be started.
        """
        match self:
            case VisitStatus.REQUESTED | VisitStatus.WAITING_ROOM | VisitStatus.IN_VISIT:
                return True
            case VisitStatus.DONE | VisitStatus.CANCELLED | VisitStatus.STAFF_DECLINED:
                return False
            case _:
                assert_never(self)

    def is_terminal(self) -> bool:
        return not self.is_active()


# Spellings used by earlier protocol revisions, kept out of the enum so they
# cannot be constructed.
_DEPRECATED_STATUS_SPELLINGS: dict[str, VisitStatus] = {
    "old waitingroom": VisitStatus.WAITING_ROOM,
    "old invisit": VisitStatus.IN_VISIT,
    "old staffdeclined": VisitStatus.STAFF_DECLINED,
}


def is_active(status: VisitStatus) -> bool:
    """Classify a status as active (resumable) or terminal."""
    return status.is_active()


class VisitModality(str, Enum):
    """How a visit is conducted. Only reported by newer backends."""

    VIRTUAL = "virtual"
    PHONE = "phone"

    @classmethod
    def from_wire(cls, raw: str) -> "VisitModality | None":
        try:
            return cls(raw)
        except ValueError:
            return None


class SessionInfo(BaseModel):
    """Legacy video-session details, only present on visits provisioned through it."""

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    api_key: str = Field(alias="apiKey")


class SessionToken(BaseModel):
    """Token issued for joining a legacy video session."""

    model_config = ConfigDict(frozen=True, strict=True)

    token: str


class IntegrationFlag(BaseModel):
    """Whether a connected peripheral integration is enabled for the visit."""

    model_config = ConfigDict(frozen=True, strict=True)

    enabled: bool


class VisitSummary(BaseModel):
    """
    Summary of a visit as needed to decide whether it can be resumed.

    Fields carry no wire aliases: the wire document is nested and tolerant,
    so it is only read through VisitSummaryDecoder.
    """

    model_config = ConfigDict(frozen=True)

    visit_id: str
    user_id: str
    status: VisitStatus
    session_info: SessionInfo | None = None
    device_integration: IntegrationFlag

    # Absent on visits created before modality was introduced
    modality: VisitModality | None = None

    def is_active(self) -> bool:
        return self.status.is_active()
