"""
Status Models
=============

Connection state and the per-vendor status line shown to the user.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class ConnectionState(str, Enum):
    """Spooler connection state, owned by the channel manager."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"


class StatusKind(str, Enum):
    """Severity marker of a status line."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusReport:
    """Short human status line plus severity."""

    message: str
    kind: StatusKind = StatusKind.PENDING

    @classmethod
    def pending(cls, message: str) -> 'StatusReport':
        return cls(message, StatusKind.PENDING)

    @classmethod
    def success(cls, message: str) -> 'StatusReport':
        return cls(message, StatusKind.SUCCESS)

    @classmethod
    def error(cls, message: str) -> 'StatusReport':
        return cls(message, StatusKind.ERROR)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {'message': self.message, 'status': self.kind.value}


IDLE = StatusReport.pending("Waiting...")
