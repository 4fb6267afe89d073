"""Outcome of a single dispatch stage (static lookup, SPA fallback)."""

import enum
from dataclasses import dataclass
from typing import Optional

from starlette.responses import Response


class Outcome(str, enum.Enum):
    SERVED = "served"
    NOT_FOUND = "not_found"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class StageResult:
    outcome: Outcome
    response: Optional[Response] = None

    @classmethod
    def served(cls, response: Response) -> "StageResult":
        return cls(Outcome.SERVED, response)

    @classmethod
    def not_found(cls, response: Response) -> "StageResult":
        return cls(Outcome.NOT_FOUND, response)

    @classmethod
    def deferred(cls) -> "StageResult":
        return cls(Outcome.DEFERRED)
