from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    NOOP = "noop"


@dataclass(frozen=True)
class Outcome:
    """Result of a mutating service call: either applied, or nothing to do."""

    status: OutcomeStatus
    message: str

    @classmethod
    def applied(cls, message: str) -> "Outcome":
        return cls(OutcomeStatus.APPLIED, message)

    @classmethod
    def noop(cls, message: str = "No changes were applied.") -> "Outcome":
        return cls(OutcomeStatus.NOOP, message)

    @property
    def is_noop(self) -> bool:
        return self.status is OutcomeStatus.NOOP

    def as_response(self) -> dict:
        return {"message": self.message}
