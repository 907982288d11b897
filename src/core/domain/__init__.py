"""
Domain models and value objects.

Contains the ledger's record model: Participant and its byte codec.
"""

from src.core.domain.participant import (
    RECORD_KIND_PARTICIPANT,
    Participant,
    RecordDecodeError,
)

__all__ = [
    "RECORD_KIND_PARTICIPANT",
    "Participant",
    "RecordDecodeError",
]
