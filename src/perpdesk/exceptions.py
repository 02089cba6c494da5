"""Exceptions raised by the analytics engine.

Only two conditions abort a computation: degenerate sizing inputs and a
malformed candle series. Insufficient indicator data resolves to a sentinel
value and soft risk judgments become warning strings, so neither has an
exception here.
"""


class EngineError(Exception):
    """Base exception for all engine errors."""


class DegenerateInputsError(EngineError):
    """Raised when inputs make the computation undefined.

    Zero risk per unit (entry == stop), non-positive economic parameters,
    a stop on the wrong side of an explicitly declared direction, or an
    indicator period below one.
    """


class DataIntegrityError(EngineError):
    """Raised when a candle series violates ordering or OHLC consistency.

    Args:
        message: Human-readable description of the first violation found.
        index: Position of the offending candle in the series, if known.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index
