"""
Services for the virtual visit package.

This package contains the decoder that turns raw visit summary documents
into domain models.
"""

from .decoder import (
    Result,
    VisitSummaryDecoder,
    decode_session_token,
    decode_visit_summary,
)

__all__ = [
    "Result",
    "VisitSummaryDecoder",
    "decode_session_token",
    "decode_visit_summary",
]
