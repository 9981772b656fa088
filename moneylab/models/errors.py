"""Error values returned by the engine.

Engine functions never raise for bad input or infeasible plans; they return
an EngineError so the caller can render it next to the form.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    NON_CONVERGENT = "non_convergent"


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass(frozen=True)
class EngineError:
    kind: ErrorKind
    message: str
    errors: list[ValidationError] = field(default_factory=list)

    @classmethod
    def invalid(cls, errors: list[ValidationError]) -> "EngineError":
        return cls(
            kind=ErrorKind.INVALID_INPUT,
            message="; ".join(e.message for e in errors),
            errors=list(errors),
        )
