"""
Fault-tolerant decoding of visit summary documents.

Key patterns:
- Result values so decode failures are data, not control flow
- All-or-nothing for required fields, best-effort for optional ones
- One helper (try_decode) owns every optional-field fallback
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

import structlog
from pydantic import ValidationError

from virtual_visit.config import DecoderConfig, get_config
from virtual_visit.domain.errors import DecodeError, MissingFieldError
from virtual_visit.domain.models import (
    IntegrationFlag,
    SessionInfo,
    SessionToken,
    VisitModality,
    VisitStatus,
    VisitSummary,
)
from virtual_visit.observability import ensure_logging_configured

ensure_logging_configured()
logger = structlog.get_logger(__name__)

ValueT = TypeVar("ValueT")
FieldT = TypeVar("FieldT")


@dataclass(frozen=True)
class Result(Generic[ValueT]):
    """
    Outcome of one decode call.

    Holds either the decoded value or the first required-field error, never
    both: a failed decode carries no partial record. unwrap() re-raises the
    error so callers that prefer exceptions can opt in.
    """

    value: ValueT | None = None
    error: DecodeError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Result must hold exactly one of value or error")

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: DecodeError) -> "Result[ValueT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> ValueT:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_err(self) -> DecodeError:
        if self.error is None:
            raise ValueError("Called unwrap_err() on a successful decode")
        return self.error


def _require(container: Mapping[str, Any], key: str, expected: type, path: str | None = None) -> Any:
    """Read a mandatory key, failing with the dotted wire path if absent or mis-shaped."""
    value = container.get(key)
    if not isinstance(value, expected):
        raise MissingFieldError(path or key)
    return value


def _decode_session_info(raw: Any) -> SessionInfo:
    if not isinstance(raw, Mapping):
        raise TypeError(f"tokBoxVisit must be a mapping, got {type(raw).__name__}")
    # Strict models only accept dict input
    return SessionInfo.model_validate(dict(raw))


def _decode_modality(raw: Any) -> VisitModality | None:
    if not isinstance(raw, str):
        raise TypeError(f"modality must be a string, got {type(raw).__name__}")
    return VisitModality.from_wire(raw)


class VisitSummaryDecoder:
    """
    Turns one parsed response body into a VisitSummary.

    Holds no per-call state, so a single instance can be shared across threads.
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()
        self.logger = logger.bind(component="visit_summary_decoder")

    def decode(self, document: Mapping[str, Any]) -> Result[VisitSummary]:
        try:
            summary = self._decode(document)
        except DecodeError as e:
            self.logger.warning("visit_decode_failed", field=e.field, error=str(e))
            return Result.err(e)

        self.logger.debug(
            "visit_decoded",
            visit_id=summary.visit_id,
            status=summary.status.value,
            has_session_info=summary.session_info is not None,
            modality=summary.modality.value if summary.modality else None,
        )
        return Result.ok(summary)

    def try_decode(
        self,
        container: Mapping[str, Any],
        key: str,
        decode_fn: Callable[[Any], FieldT | None],
    ) -> FieldT | None:
        """
        Decode an optional field, treating any failure as absence.

        Absence is the normal case for fields that older or legacy records
        never carried, so failures here are logged at debug level only.
        """
        if key not in container:
            return None
        try:
            return decode_fn(container[key])
        except (DecodeError, ValidationError, TypeError, ValueError) as e:
            if self.config.log_optional_fallbacks:
                self.logger.debug("optional_field_dropped", field=key, error=str(e))
            return None

    def _decode(self, document: Mapping[str, Any]) -> VisitSummary:
        if not isinstance(document, Mapping):
            raise MissingFieldError("visitId")

        # Required fields first, so a broken record is never masked by an optional one
        visit_id = _require(document, "visitId", str)
        user_id = _require(document, "userId", str)
        status = VisitStatus.from_wire(_require(document, "status", str))

        integrations = _require(document, "integrations", Mapping)
        tyto_care = _require(integrations, "tytoCare", Mapping, "integrations.tytoCare")
        enabled = _require(tyto_care, "enabled", bool, "integrations.tytoCare.enabled")

        session_info = self.try_decode(document, "tokBoxVisit", _decode_session_info)
        modality = self.try_decode(document, "modality", _decode_modality)

        return VisitSummary(
            visit_id=visit_id,
            user_id=user_id,
            status=status,
            session_info=session_info,
            device_integration=IntegrationFlag(enabled=enabled),
            modality=modality,
        )


@lru_cache
def _shared_decoder() -> VisitSummaryDecoder:
    return VisitSummaryDecoder(get_config().decoder)


def decode_visit_summary(document: Mapping[str, Any]) -> Result[VisitSummary]:
    """Decode a visit summary document with the configured shared decoder."""
    return _shared_decoder().decode(document)


def decode_session_token(document: Mapping[str, Any]) -> Result[SessionToken]:
    """Decode the token response issued for a legacy video session."""
    if not isinstance(document, Mapping) or not isinstance(document.get("token"), str):
        return Result.err(MissingFieldError("token"))
    return Result.ok(SessionToken(token=document["token"]))
