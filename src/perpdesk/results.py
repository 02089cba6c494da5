"""Discriminated outcome type returned by the public engine operations.

Callers branch once on ``outcome.ok``: a success carries the payload, a
failure carries an ErrorKind and message. Insufficient indicator data is not
a failure (see ConfluenceDetails.momentum_sufficient) and risk warnings
travel inside a successful PositionResult.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from perpdesk.exceptions import DataIntegrityError, DegenerateInputsError, EngineError

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Named failure kinds an engine operation can report."""

    DEGENERATE_INPUTS = "degenerate_inputs"
    DATA_INTEGRITY = "data_integrity"


_KIND_BY_EXCEPTION: dict[type[EngineError], ErrorKind] = {
    DegenerateInputsError: ErrorKind.DEGENERATE_INPUTS,
    DataIntegrityError: ErrorKind.DATA_INTEGRITY,
}


@dataclass(frozen=True)
class Failure:
    """Why an engine operation produced no payload."""

    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: EngineError) -> "Failure":
        for exc_type, kind in _KIND_BY_EXCEPTION.items():
            if isinstance(exc, exc_type):
                return cls(kind=kind, message=str(exc))
        raise TypeError(f"No error kind registered for {type(exc).__name__}") from exc


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either ``value`` (success) or ``failure``, never both."""

    value: T | None = None
    failure: Failure | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.failure is None):
            raise ValueError("Outcome needs exactly one of value or failure")

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """Return the payload, raising the matching EngineError on failure."""
        if self.failure is not None:
            if self.failure.kind == ErrorKind.DATA_INTEGRITY:
                raise DataIntegrityError(self.failure.message)
            raise DegenerateInputsError(self.failure.message)
        assert self.value is not None
        return self.value
